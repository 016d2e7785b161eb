import math
from datetime import date, datetime, time, timezone


def to_epoch_seconds(value: date) -> int:
    """
    Convert a date or datetime to whole seconds since the UTC epoch.
    A bare date is taken as midnight UTC of that day; a naive datetime is
    read as local time, the same way datetime.timestamp() does.
    """
    if isinstance(value, datetime):
        return math.floor(value.timestamp())
    return int(datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp())


def is_timestamp(value) -> bool:
    return isinstance(value, date)
