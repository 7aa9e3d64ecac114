"""Calendar-day bucketing of feedback submissions."""
from __future__ import annotations

import datetime
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dept_analytics.records import FeedbackRecord

TimeZone = Union[datetime.tzinfo, str, None]


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Number of submissions on one calendar day."""

    date: datetime.date
    count: int
    formatted_date: str


_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_day(day: datetime.date) -> str:
    """Short chart label such as ``"Mar 5"``, independent of the process locale."""
    return f"{_MONTHS[day.month - 1]} {day.day}"


def resolve_timezone(tz: TimeZone) -> datetime.tzinfo:
    """Return a ``tzinfo`` for *tz* (an IANA name, a tzinfo or *None* for UTC).

    Raises
    ------
    ValueError
        If *tz* names an unknown zone.
    """
    if tz is None:
        return datetime.timezone.utc
    if isinstance(tz, datetime.tzinfo):
        return tz
    if tz.upper() == "UTC":
        return datetime.timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {tz}") from exc


def record_day(
    record: FeedbackRecord, tz: datetime.tzinfo
) -> Optional[datetime.date]:
    stamp = record.timestamp
    if stamp is None:
        return None
    # naive values are UTC, never host-local
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=datetime.timezone.utc)
    try:
        return stamp.astimezone(tz).date()
    except (OverflowError, ValueError):
        # shifted past year 1 or 9999
        return None


def time_series(
    records: Iterable[FeedbackRecord], tz: TimeZone = None
) -> Tuple[TimeSeriesPoint, ...]:
    """Count *records* per calendar day in *tz*, oldest day first.

    Records without a usable timestamp are skipped.  Days without
    submissions are not filled in.
    """

    zone = resolve_timezone(tz)
    counts: Counter[datetime.date] = Counter(
        day for day in (record_day(r, zone) for r in records) if day is not None
    )
    return tuple(
        TimeSeriesPoint(date=day, count=counts[day], formatted_date=format_day(day))
        for day in sorted(counts)
    )
