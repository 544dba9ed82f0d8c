from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from store_manager.common.durations import combine_shift, days_from_hours, hours_between

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_hours_between_rounds_to_two_decimals():
    assert hours_between(T0, T0 + timedelta(hours=8)) == Decimal("8.00")
    assert hours_between(T0, T0 + timedelta(minutes=20)) == Decimal("0.33")
    assert hours_between(T0, T0 + timedelta(hours=24, minutes=1)) == Decimal("24.02")


def test_hours_between_is_not_positive_for_reversed_times():
    assert hours_between(T0, T0) == Decimal("0.00")
    assert hours_between(T0, T0 - timedelta(hours=1)) < 0


@pytest.mark.parametrize(
    "hours, days",
    [
        ("0.5", 1),
        ("24", 1),
        ("24.01", 2),
        ("48", 2),
        ("48.5", 3),
        ("0", 1),
    ],
)
def test_days_from_hours(hours, days):
    assert days_from_hours(Decimal(hours)) == days


def test_combine_shift_keeps_the_day():
    start, end = combine_shift(date(2024, 3, 1), time(9, 0), time(17, 30))
    assert start == datetime(2024, 3, 1, 9, 0)
    assert end - start == timedelta(hours=8, minutes=30)
