"""Minor-unit money helpers.

Every amount that crosses a service boundary is an ``int`` of cents/pence.
Decimal display values only exist at the edges (form input, formatting).
"""

from __future__ import annotations

import re
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Union

from ..core.constants import MINOR_UNITS_PER_MAJOR
from ..core.enums import Currency
from ..core.exceptions import ValidationError

Number = Union[Decimal, int, float, str]

_SYMBOLS = {
    Currency.EUR: "€",
    Currency.GBP: "£",
}

_CURRENCY_INPUT = re.compile(r"^\d+(\.\d{0,2})?$")
_NON_NUMERIC = re.compile(r"[^\d.]")

CENT = Decimal("0.01")


def to_decimal(value: Number, field_name: str = "amount") -> Decimal:
    """Coerce user/driver values into Decimal.

    Floats go through ``str`` so 10.1 stays 10.1 instead of its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: must be a valid number")
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid {field_name}: must be a valid number")
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name}: must be a valid number")
    return result


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def to_minor_units(amount: Number) -> int:
    """10.50 -> 1050."""
    return round_half_up(to_decimal(amount) * MINOR_UNITS_PER_MAJOR)


def from_minor_units(minor_units: int) -> Decimal:
    """1050 -> Decimal('10.50'). Display only."""
    return (Decimal(int(minor_units)) / MINOR_UNITS_PER_MAJOR).quantize(CENT)


def currency_symbol(currency: Currency) -> str:
    return _SYMBOLS[Currency(currency)]


def format_currency(minor_units: int, currency: Currency = Currency.EUR, show_symbol: bool = True) -> str:
    """Format minor units for display, e.g. ``€1,234.56`` or ``-£0.50``."""
    amount = from_minor_units(minor_units)
    if not show_symbol:
        return f"{amount:.2f}"

    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(amount):,.2f}"


def parse_input_to_minor_units(value: str) -> int:
    """Lenient form-field parser: keeps digits and dots, 0 when nothing parses."""
    cleaned = _NON_NUMERIC.sub("", value or "")
    # longest leading number wins, e.g. "12.5.3" -> 12.5
    match = re.match(r"\d*\.?\d*", cleaned)
    text = match.group(0) if match else ""
    if not text or text == ".":
        return 0
    if text.endswith("."):
        text = text[:-1]
    if text.startswith("."):
        text = "0" + text
    return to_minor_units(Decimal(text))


def is_valid_currency_input(value: str) -> bool:
    """Digits, an optional dot and at most two decimals."""
    return bool(_CURRENCY_INPUT.match(value or ""))
