"""
Missing-data handling shared by the scorers.

None is the only "no data" value. Averages, timestamps and labels all go
through these helpers so a zero-count source can never turn into a 0.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Union

Number = Union[int, float]

INSUFFICIENT_DATA_LABEL = "Insufficient data"


def mean_or_none(values: Iterable[Optional[Number]]) -> Optional[float]:
    """Average of the values that are present, or None if none are."""
    present = [float(v) for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def mean_over_records(values: Iterable[Optional[Number]], missing: Number = 0) -> Optional[float]:
    """
    Average over every record, counting a missing field as `missing`.

    Only an empty collection gives None: a record that exists but lacks the
    field still counts towards the average.
    """
    filled = [float(missing) if v is None else float(v) for v in values]
    if not filled:
        return None
    return sum(filled) / len(filled)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps from the store are UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def latest_timestamp(values: Iterable[Optional[datetime]]) -> Optional[datetime]:
    """Most recent timestamp, or None if there are none."""
    present = [as_utc(v) for v in values if v is not None]
    if not present:
        return None
    return max(present)


def describe_metric(value: Optional[Number], suffix: str = "") -> str:
    """
    Display label for a nullable metric.

    None is shown as insufficient data; a real zero is shown as 0.
    """
    if value is None:
        return INSUFFICIENT_DATA_LABEL
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.1f}{suffix}"
    return f"{int(value)}{suffix}"
