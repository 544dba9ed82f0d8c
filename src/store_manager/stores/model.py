from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Currency


@dataclass(frozen=True)
class Store:
    """Domain entity: a shop that records sales, shifts and expenses.

    Invariant: ``default_currency`` is one of ``supported_currencies`` and the
    set is never empty.
    """

    store_id: int
    name: str
    supported_currencies: frozenset[Currency]
    default_currency: Currency
    address: Optional[str] = None
    phone: Optional[str] = None
    manager_name: Optional[str] = None

    def supports(self, currency: Currency) -> bool:
        return Currency(currency) in self.supported_currencies
