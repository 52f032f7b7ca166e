"""
Deadline reminders for items due today or tomorrow.

Which reminders were already delivered is tracked in a caller-owned
``NotificationLedger`` that resets itself when the date changes.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import date, datetime

from due_planner.models import DueItem, UrgencyBucket

EVENING_HOUR = 18
MORNING_HOUR = 8


@dataclass
class DueReminder:
    """A reminder to deliver, with the note it points at."""
    title: str
    due: str
    notes: str = ""
    path: str = ""


@dataclass(frozen=True)
class NotificationPolicy:
    enabled: bool = False
    evening_before: bool = True
    morning_of: bool = True


@dataclass
class NotificationLedger:
    """Keys of reminders already delivered on ``last_date``."""
    sent: set[str] = field(default_factory=set)
    last_date: t.Optional[date] = None

    def reset_if_stale(self, today: date) -> bool:
        """Forget yesterday's keys. Returns True if the ledger was cleared."""
        if self.last_date == today:
            return False
        self.sent.clear()
        self.last_date = today
        return True


def check_and_notify(
    items: t.Iterable[DueItem],
    policy: NotificationPolicy,
    ledger: NotificationLedger,
    now: datetime,
    deliver: t.Callable[[DueReminder], None],
) -> list[DueReminder]:
    """Deliver the reminders that are due and not yet sent today.

    - due tomorrow, evening reminders on, 18:00 or later -> "Due Tomorrow"
    - due today, morning reminders on, 08:00 or later -> "Due Today"

    :return: The reminders delivered by this call.
    """
    if not policy.enabled:
        return []

    today = now.date()
    ledger.reset_if_stale(today)
    delivered: list[DueReminder] = []

    for item in items:
        if item.due is None:
            continue
        urgency = item.urgency(today)

        if urgency is UrgencyBucket.TOMORROW and policy.evening_before and now.hour >= EVENING_HOUR:
            key = f"{item.file.path}:eve"
            title = f"Due Tomorrow: {item.name}"
        elif urgency is UrgencyBucket.TODAY and policy.morning_of and now.hour >= MORNING_HOUR:
            key = f"{item.file.path}:morning"
            title = f"Due Today: {item.name}"
        else:
            continue

        if key in ledger.sent:
            continue
        reminder = DueReminder(
            title=title,
            due=item.due.isoformat(),
            notes=f"Subject: {item.subject}",
            path=item.file.path,
        )
        deliver(reminder)
        ledger.sent.add(key)
        delivered.append(reminder)

    return delivered
