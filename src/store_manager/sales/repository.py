from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Currency
from .model import Sale, SaleFilter


class SaleRepository(Protocol):
    """Persistence port for daily sales.

    At most one sale exists per (store_id, currency, sale_date); ``upsert_daily``
    is the only way to write a new day and must be atomic in the backing store.
    """

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        raise NotImplementedError

    def find_daily(self, store_id: int, currency: Currency, sale_date: date) -> Optional[Sale]:
        raise NotImplementedError

    def list(self, flt: SaleFilter, *, limit: Optional[int] = None) -> Sequence[Sale]:
        raise NotImplementedError

    def upsert_daily(self, sale: Sale) -> Sale:
        """Insert, or overwrite the existing sale for the same day key."""
        raise NotImplementedError

    def update(self, sale: Sale) -> bool:
        raise NotImplementedError

    def delete(self, sale_id: int) -> bool:
        raise NotImplementedError

    def delete_many(self, sale_ids: Sequence[int]) -> int:
        raise NotImplementedError
