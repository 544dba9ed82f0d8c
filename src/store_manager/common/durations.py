from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from ..core.constants import HOURS_PER_DAY, MILLISECONDS_PER_HOUR
from .money import CENT, round_half_up, to_decimal


def _elapsed_milliseconds(delta: timedelta) -> int:
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def hours_between(check_in: datetime, check_out: datetime) -> Decimal:
    """Elapsed hours rounded to 2 decimals.

    Zero or negative when check_out is not after check_in; callers reject that
    through ``assert_valid_date_range`` before using the result.
    """
    ms = _elapsed_milliseconds(check_out - check_in)
    hours = Decimal(ms) / Decimal(MILLISECONDS_PER_HOUR)
    return (Decimal(round_half_up(hours * 100)) / 100).quantize(CENT)


def days_from_hours(hours) -> int:
    """Billable days for a fixed-wage shift.

    Any shift counts as one day; each started block of 24 hours past the
    first adds another.
    """
    value = to_decimal(hours, "hours")
    return max(1, math.ceil(value / HOURS_PER_DAY))


def combine_shift(work_date: date, start: time, end: time) -> tuple[datetime, datetime]:
    """Check-in/check-out pair for a shift entered as one date and two clock times."""
    return datetime.combine(work_date, start), datetime.combine(work_date, end)
