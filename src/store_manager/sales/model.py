from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Optional

from ..core.enums import Currency


@dataclass(frozen=True)
class SaleChannels:
    """Per-channel takings in minor units."""

    cash: int = 0
    online: int = 0
    delivery: int = 0
    just_eat: int = 0
    mylocal: int = 0
    credit_card: int = 0
    deliveroo: int = 0
    uber_eats: int = 0

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def total(self) -> int:
        return sum(getattr(self, name) for name in self.names())

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.names()}


@dataclass(frozen=True)
class Sale:
    """Domain entity: one store's takings for one currency on one day.

    ``total`` is always ``channels.total()`` and ``difference`` is
    ``total - cash_in_till``.
    """

    sale_id: int
    store_id: int
    sale_date: date
    currency: Currency
    channels: SaleChannels
    total: int
    cash_in_till: int
    difference: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SaleFilter:
    store_id: Optional[int] = None
    currency: Optional[Currency] = None
    start: Optional[date] = None
    end: Optional[date] = None
