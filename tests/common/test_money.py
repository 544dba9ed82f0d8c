from decimal import Decimal

import pytest

from store_manager.common.money import (
    format_currency,
    from_minor_units,
    is_valid_currency_input,
    parse_input_to_minor_units,
    round_half_up,
    to_minor_units,
)
from store_manager.core.enums import Currency
from store_manager.core.exceptions import ValidationError


def test_to_minor_units_converts_major_amounts():
    assert to_minor_units("10.50") == 1050
    assert to_minor_units(10.1) == 1010
    assert to_minor_units(Decimal("0")) == 0


def test_halves_round_towards_positive_infinity():
    assert round_half_up(Decimal("2.5")) == 3
    assert round_half_up(Decimal("-2.5")) == -2
    assert to_minor_units("1.005") == 101


def test_from_minor_units_is_display_only_decimal():
    assert from_minor_units(1050) == Decimal("10.50")
    assert from_minor_units(-5) == Decimal("-0.05")


@pytest.mark.parametrize("minor", [0, 1, 99, 1050, 123456789])
def test_minor_units_survive_display_conversion(minor):
    assert to_minor_units(from_minor_units(minor)) == minor


@pytest.mark.parametrize("amount", ["0", "0.10", "19.99", "1234.5", "-7.25"])
def test_two_place_decimals_survive_minor_unit_conversion(amount):
    assert from_minor_units(to_minor_units(Decimal(amount))) == Decimal(amount)


def test_format_currency_uses_symbol_and_grouping():
    assert format_currency(123456, Currency.EUR) == "€1,234.56"
    assert format_currency(-50, Currency.GBP) == "-£0.50"
    assert format_currency(123456, Currency.EUR, show_symbol=False) == "1234.56"


def test_lenient_input_parser():
    assert parse_input_to_minor_units("€12.50") == 1250
    assert parse_input_to_minor_units("12.5.3") == 1250
    assert parse_input_to_minor_units(".5") == 50
    assert parse_input_to_minor_units("5.") == 500
    assert parse_input_to_minor_units("abc") == 0
    assert parse_input_to_minor_units("") == 0


def test_currency_input_shape():
    assert is_valid_currency_input("12.34")
    assert is_valid_currency_input("12")
    assert not is_valid_currency_input("12.345")
    assert not is_valid_currency_input("-1")
    assert not is_valid_currency_input("")


def test_non_numbers_are_rejected():
    with pytest.raises(ValidationError):
        to_minor_units("ten")
    with pytest.raises(ValidationError):
        to_minor_units("NaN")
