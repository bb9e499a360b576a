"""
Report window helpers.
Day counting for historical windows plus the CM / PM / YTD / L30 / L7 presets.
"""
import math
from datetime import datetime, timedelta, timezone
from calendar import monthrange
from enum import Enum
from typing import Optional, Tuple

SECONDS_PER_DAY = 86400


class Timeframe(str, Enum):
    """
    Timeframe presets.
    - CM: Current Month (1st of current month to now)
    - PM: Previous Month (1st to last day of previous month)
    - YTD: Year-to-Date (Jan 1st to now)
    - L30: Last 30 days
    - L7: Last 7 days
    """
    CM = "cm"
    PM = "pm"
    YTD = "ytd"
    L30 = "l30"
    L7 = "l7"


def get_date_range(timeframe: Timeframe, reference: datetime = None) -> Tuple[datetime, datetime]:
    """
    Calculate the window for a preset.

    Args:
        timeframe: CM, PM, YTD, L30 or L7
        reference: Reference timestamp (defaults to now)

    Returns:
        Tuple of (start, end)
    """
    if reference is None:
        reference = datetime.now()
    midnight = reference.replace(hour=0, minute=0, second=0, microsecond=0)

    if timeframe == Timeframe.PM:
        # Previous Month: full previous month (static)
        if reference.month == 1:
            prev_year, prev_month = reference.year - 1, 12
        else:
            prev_year, prev_month = reference.year, reference.month - 1
        start = datetime(prev_year, prev_month, 1)
        _, last_day = monthrange(prev_year, prev_month)
        end = datetime(prev_year, prev_month, last_day)

    elif timeframe == Timeframe.L30:
        start = midnight - timedelta(days=30)
        end = reference

    elif timeframe == Timeframe.L7:
        start = midnight - timedelta(days=7)
        end = reference

    elif timeframe == Timeframe.YTD:
        start = datetime(reference.year, 1, 1)
        end = reference

    else:
        # Current Month: 1st of current month to now
        start = midnight.replace(day=1)
        end = reference

    return start, end


class WindowError(ValueError):
    """A report window was given only one of its two ends."""


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps are naive UTC; convert aware input to match."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def resolve_window(
    start: Optional[datetime],
    end: Optional[datetime],
    timeframe: Optional[Timeframe] = None,
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Explicit dates win; otherwise fall back to the preset, if any.

    Raises WindowError when only one date is given and there is no preset.
    """
    start, end = to_naive_utc(start), to_naive_utc(end)
    if start is not None and end is not None:
        return start, end
    if timeframe is not None:
        return get_date_range(timeframe)
    if start is not None or end is not None:
        raise WindowError("start_date and end_date must be given together")
    return None, None


def ceil_days(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded up. Never negative."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / SECONDS_PER_DAY)


def period_days(start: datetime, end: datetime) -> int:
    """Total days in a report window; a reversed window has zero days."""
    return ceil_days(start, end)


def is_in_period(target: datetime, start: datetime, end: datetime) -> bool:
    """Check if target falls within the window (inclusive)."""
    if target is None:
        return False
    return start <= target <= end
