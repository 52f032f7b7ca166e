"""Urgency classification of due dates."""
from __future__ import annotations

import typing as t
from datetime import date, datetime

from due_planner.models import UrgencyBucket

# Upper bound (inclusive, in days) of the "week" bucket
WEEK_HORIZON_DAYS = 7


def classify(due: t.Optional[date], today: date) -> UrgencyBucket:
    """Map a due date to its urgency bucket.

    Only calendar dates are compared; a time-of-day on either side is dropped.

    :param due: Due date (or datetime), None when the item has no due date.
    :param today: The current local date.
    :return: The bucket for ``due - today`` in whole days.
    """
    if due is None:
        return UrgencyBucket.NONE

    if isinstance(due, datetime):
        due = due.date()
    if isinstance(today, datetime):
        today = today.date()

    diff_days = (due - today).days
    if diff_days < 0:
        return UrgencyBucket.OVERDUE
    if diff_days == 0:
        return UrgencyBucket.TODAY
    if diff_days == 1:
        return UrgencyBucket.TOMORROW
    if diff_days <= WEEK_HORIZON_DAYS:
        return UrgencyBucket.WEEK
    return UrgencyBucket.LATER
