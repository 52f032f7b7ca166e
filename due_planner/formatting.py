"""Human-readable date labels shared by the list and calendar views."""
from __future__ import annotations

import calendar
from datetime import date, timedelta

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

EN_DASH = "–"


def month_short(d: date) -> str:
    return calendar.month_abbr[d.month]


def format_date_short(d: date) -> str:
    """'Feb 15'"""
    return f"{month_short(d)} {d.day}"


def format_date_long(d: date) -> str:
    """'February 15, 2026'"""
    return f"{calendar.month_name[d.month]} {d.day}, {d.year}"


def month_label(year: int, month: int) -> str:
    """'February 2026'"""
    return f"{calendar.month_name[month]} {year}"


def week_label(sunday: date) -> str:
    """Label for the Sunday-start week beginning at ``sunday``.

    'Feb 8 – 14, 2026', or 'Dec 28 – Jan 3, 2026' when the week spans two
    months. The year shown is the Saturday's.
    """
    saturday = sunday + timedelta(days=6)
    if sunday.month == saturday.month:
        return f"{month_short(sunday)} {sunday.day} {EN_DASH} {saturday.day}, {saturday.year}"
    return (
        f"{month_short(sunday)} {sunday.day} {EN_DASH} "
        f"{month_short(saturday)} {saturday.day}, {saturday.year}"
    )


def day_label(d: date) -> str:
    """'Thursday, February 12, 2026'"""
    return f"{calendar.day_name[d.weekday()]}, {format_date_long(d)}"
