"""Input gates.

Everything here raises ``ValidationError`` with a message the UI shows as-is,
so the wording is part of the API contract.
"""

from __future__ import annotations

from dataclasses import fields, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, TypeVar

from ..core.enums import Currency
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime, to_utc
from .money import round_half_up, to_decimal

T = TypeVar("T")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any, *, max_length: Optional[int] = None, field_name: str = "text") -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return text or None


def parse_currency(value: Any) -> Currency:
    if isinstance(value, Currency):
        return value
    try:
        return Currency(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Valid currency (EUR or GBP) is required")


def parse_datetime(value: Any, field_name: str = "date") -> datetime:
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return to_utc(datetime(value.year, value.month, value.day))
    if not value or not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name}: {value}")
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")


def parse_date(value: Any, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return to_utc(value).date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name}: {value}")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")


def parse_number(
    value: Any,
    field_name: str = "number",
    *,
    min_value: Optional[Decimal] = None,
    max_value: Optional[Decimal] = None,
    allow_zero: bool = True,
) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Invalid {field_name}: must be a valid number")
    num = to_decimal(value, field_name)

    if min_value is not None and num < min_value:
        raise ValidationError(f"Invalid {field_name}: must be at least {min_value}")
    if max_value is not None and num > max_value:
        raise ValidationError(f"Invalid {field_name}: must be at most {max_value}")
    if not allow_zero and num == 0:
        raise ValidationError(f"Invalid {field_name}: must be greater than 0")
    return num


def parse_integer(
    value: Any,
    field_name: str = "integer",
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    allow_zero: bool = True,
) -> int:
    num = parse_number(value, field_name, min_value=min_value, max_value=max_value, allow_zero=allow_zero)
    if num != num.to_integral_value():
        raise ValidationError(f"Invalid {field_name}: must be an integer")
    return int(num)


def parse_monetary_amount(value: Any, field_name: str = "amount") -> int:
    """Non-negative minor-unit amount, rounded to an integer."""
    return round_half_up(parse_number(value, field_name, min_value=Decimal(0)))


def parse_optional_rate(value: Any, field_name: str) -> Optional[Decimal]:
    """Wage/rate fields: empty means "not set", otherwise a non-negative decimal."""
    if value is None or value == "":
        return None
    rate = parse_number(value, field_name, min_value=Decimal(0))
    return rate if rate != 0 else None


def assert_currency_supported(store, currency: Currency) -> None:
    if not store.supports(currency):
        raise ValidationError(f"This store does not support {Currency(currency).value}")


def assert_non_negative(value, field_name: str) -> None:
    if value is None or to_decimal(value, field_name) < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")


def assert_positive_integer(value, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive number")


def assert_valid_date_range(check_in: datetime, check_out: datetime) -> None:
    if check_out <= check_in:
        raise ValidationError("Check-out time must be after check-in time")


def require_id(value: Any, field_name: str, message: str) -> int:
    """Reference ids: blank raises ``message``, anything else must be a positive integer."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(message)
    return parse_integer(value, field_name, min_value=1)


def parse_minor_amount(value: Any, field_name: str, *, default: Optional[int] = None) -> int:
    """Integer minor units, never negative."""
    if (value is None or value == "") and default is not None:
        return default
    amount = parse_integer(value, field_name)
    assert_non_negative(amount, field_name)
    return amount


def merge_partial(base: T, changes: Any) -> T:
    """Partial edits: every field ``changes`` leaves as ``None`` keeps ``base``'s value."""
    return replace(
        base,
        **{f.name: getattr(changes, f.name) for f in fields(changes) if getattr(changes, f.name) is not None},
    )
