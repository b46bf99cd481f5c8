"""Date-time helpers for day and month boundaries.

All ledger dates use the server-local clock, stored as naive datetimes.
"""

from datetime import date, datetime


def local_now() -> datetime:
    """Return the current server-local time as a naive datetime."""

    return datetime.now()


def local_today(now: datetime | None = None) -> date:
    """Return the server-local calendar date for the provided timestamp."""

    return (now or local_now()).date()


def start_of_day(now: datetime | None = None) -> datetime:
    """Return local midnight of the day containing ``now``."""

    current = now or local_now()
    return datetime(current.year, current.month, current.day)


def start_of_month(now: datetime | None = None) -> datetime:
    """Return 00:00 on the first day of the month containing ``now``."""

    current = now or local_now()
    return datetime(current.year, current.month, 1)
