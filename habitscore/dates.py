"""Calendar helpers — day-stamps, bucket starts, labels.

Everything works on naive `datetime.date` values in whatever local calendar
the caller uses. Weeks start on Monday.
"""

import calendar
from datetime import date, datetime, timedelta, timezone

from habitscore.config import TIMEZONE_OFFSET_HOURS

TZ = timezone(timedelta(hours=TIMEZONE_OFFSET_HOURS))


def local_today() -> date:
    """Today's date in the configured timezone."""
    return datetime.now(TZ).date()


def to_day_stamp(d: date) -> str:
    return d.isoformat()


def from_day_stamp(stamp: str) -> date:
    """Parse a `YYYY-MM-DD` stamp. Callers validate untrusted input first."""
    return date.fromisoformat(stamp)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def start_of_week(d: date) -> date:
    """Monday on or before `d`."""
    return d - timedelta(days=d.weekday())


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def days_in_month(d: date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def day_label(d: date) -> str:
    """Short day-and-month, e.g. "5 Mar"."""
    return f"{d.day} {calendar.month_abbr[d.month]}"


def month_label(d: date) -> str:
    """Short month and year, e.g. "Mar 2025"."""
    return f"{calendar.month_abbr[d.month]} {d.year}"


def heading_label(d: date) -> str:
    """Long heading for a single day, e.g. "Wed, 5 Mar 2025"."""
    return f"{calendar.day_abbr[d.weekday()]}, {d.day} {calendar.month_abbr[d.month]} {d.year}"
