"""Time helpers.

All timestamps are stored as naive UTC datetimes, the same way the models
default them, so comparisons never mix aware and naive values.
"""

import math
from datetime import date, datetime, time, timezone


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Unsupported time value: {value!r}")


def round_half_up(value):
    return int(math.floor(value + 0.5))


def minutes_between(start, end):
    """Whole minutes from ``start`` to ``end``, rounded half up."""
    seconds = (to_naive_utc(end) - to_naive_utc(start)).total_seconds()
    return round_half_up(seconds / 60)


def start_of_day(value):
    return datetime.combine(value, time.min)


def end_of_day(value):
    return datetime.combine(value, time.max)


def isoformat(value):
    return value.isoformat() if value else None
