"""Numeric and timestamp helpers shared by the analyzers."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import dateutil.parser as parser


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """Round with halves going up, matching the stored-record convention.

    Python's ``round`` rounds halves to even, which would make 2.5% -> 2%.
    Returns an ``int`` when ``ndigits`` is 0.
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5) / factor
    if ndigits == 0:
        return int(rounded)
    return rounded


def mean(values: list[float]) -> float:
    """Arithmetic mean; 0.0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; returns None when unparseable.

    Naive values are taken as UTC so they can be compared with aware ones.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = parser.isoparse(value)
        except (ValueError, TypeError, OverflowError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def minutes_between(start: str | datetime | None, end: str | datetime | None) -> float | None:
    """Elapsed minutes from ``start`` to ``end``; None if either is unparseable."""
    start_dt = parse_timestamp(start)
    end_dt = parse_timestamp(end)
    if start_dt is None or end_dt is None:
        return None
    return (end_dt - start_dt).total_seconds() / 60


def local_hour(value: str | datetime | None) -> int | None:
    """Hour of day in local time for an ISO timestamp.

    Aware timestamps are converted to the local zone; naive ones are already
    local wall-clock time.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = parser.isoparse(value)
        except (ValueError, TypeError, OverflowError):
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.hour


def to_iso(dt: datetime) -> str:
    """Serialize a datetime as ISO-8601 with millisecond precision and ``Z`` for UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
