"""Size and recency formatting utilities."""

from datetime import datetime

from rls.constants import (
    AGE_COLORS,
    DAY,
    HOUR,
    HOURS_ORANGE_AFTER,
    JUST_NOW_SECONDS,
    MINUTE,
    MINUTES_YELLOW_AFTER,
    MONTH,
    SIZE_UNITS,
    WEEK,
    YEAR,
)
from rls.models import AgeBucket, AgeInfo


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Uses binary steps of 1024. Non-byte units carry one decimal which is
    truncated rather than rounded, so a value never spills into "1024.0".

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string like "1.5 MB"

    Examples:
        >>> format_size(0)
        '0 B'
        >>> format_size(1536)
        '1.5 KB'
        >>> format_size(1048575)
        '1023.9 KB'
    """
    if size_bytes < 0:
        raise ValueError(f"size cannot be negative: {size_bytes}")
    if size_bytes < 1024:
        return f"{size_bytes} B"

    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1

    tenths = size_bytes * 10 // 1024**exponent
    return f"{tenths // 10}.{tenths % 10} {SIZE_UNITS[exponent]}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _largest_unit(seconds: int) -> str:
    """Express a non-negative duration in its largest whole unit."""
    for unit, size in (
        ("year", YEAR),
        ("month", MONTH),
        ("week", WEEK),
        ("day", DAY),
        ("hour", HOUR),
        ("minute", MINUTE),
    ):
        if seconds >= size:
            return _plural(seconds // size, unit)
    return _plural(seconds, "second")


def bucket_age(modified_at: datetime, now: datetime) -> AgeInfo:
    """Place a modification time into an age bucket.

    ``now`` is passed in rather than read here so that every row of one
    listing is measured against the same instant.

    Args:
        modified_at: Last modification timestamp
        now: Reference time for the whole listing

    Returns:
        AgeInfo with the bucket, its rich color and a relative time string
    """
    delta = (now - modified_at).total_seconds()

    if delta < 0:
        ahead = max(1, int(-delta))
        return AgeInfo(AgeBucket.FUTURE, AGE_COLORS["future"], f"in {_largest_unit(ahead)}")

    seconds = int(delta)
    text = f"{_largest_unit(seconds)} ago"

    if seconds < MINUTE:
        if seconds < JUST_NOW_SECONDS:
            text = "just now"
        return AgeInfo(AgeBucket.SECONDS, AGE_COLORS["fresh"], text)
    if seconds < HOUR:
        color = AGE_COLORS["fresh"] if seconds < MINUTES_YELLOW_AFTER else AGE_COLORS["recent"]
        return AgeInfo(AgeBucket.MINUTES, color, text)
    if seconds < DAY:
        color = AGE_COLORS["recent"] if seconds < HOURS_ORANGE_AFTER else AGE_COLORS["today"]
        return AgeInfo(AgeBucket.HOURS, color, text)
    if seconds < WEEK:
        return AgeInfo(AgeBucket.DAYS, AGE_COLORS["days"], text)
    if seconds < MONTH:
        return AgeInfo(AgeBucket.WEEKS, AGE_COLORS["weeks"], text)
    if seconds < YEAR:
        return AgeInfo(AgeBucket.MONTHS, AGE_COLORS["old"], text)
    return AgeInfo(AgeBucket.YEARS, AGE_COLORS["old"], text)
