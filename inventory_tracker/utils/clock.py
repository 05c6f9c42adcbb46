# inventory_tracker/utils/clock.py
from datetime import datetime, timedelta, timezone
from typing import Optional


# Naive UTC timestamps are stored everywhere (SQLite drops tzinfo anyway)
def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def next_stamp(now: datetime, previous: Optional[datetime]) -> datetime:
    """Return `now`, or one microsecond past `previous` if the clock has not moved on."""
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def month_bounds(moment: datetime):
    """First instant of the calendar month containing `moment` and of the next one."""
    start = moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end
