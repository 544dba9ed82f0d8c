from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence

from ..common.http import camel
from ..common.validators import (
    assert_currency_supported,
    merge_partial,
    optional_text,
    parse_currency,
    parse_date,
    parse_minor_amount,
    require_id,
)
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..stores.repository import StoreRepository
from .model import Sale, SaleChannels, SaleFilter
from .reconciliation import Reconciliation, reconcile
from .repository import SaleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaleInput:
    """One day's takings as entered. ``channels`` maps channel name to minor units."""

    store_id: Any = None
    sale_date: Any = None
    currency: Any = None
    channels: Mapping[str, Any] = field(default_factory=dict)
    cash_in_till: Any = None
    notes: Any = None

    @classmethod
    def from_record(cls, sale: Sale) -> SaleInput:
        return cls(
            store_id=sale.store_id,
            sale_date=sale.sale_date,
            currency=sale.currency,
            channels=sale.channels.as_dict(),
            cash_in_till=sale.cash_in_till,
            notes=sale.notes,
        )


def build_channels(raw: Mapping[str, Any]) -> SaleChannels:
    known = set(SaleChannels.names())
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValidationError(f"Unknown sale channel: {unknown[0]}")
    return SaleChannels(**{name: parse_minor_amount(raw.get(name), camel(name), default=0) for name in known})


class SaleService:
    """Use cases: daily sales per store and currency, and till reconciliation."""

    def __init__(self, sales: SaleRepository, stores: StoreRepository):
        self._sales = sales
        self._stores = stores

    def _build(self, sale_id: int, data: SaleInput) -> Sale:
        store_id = require_id(data.store_id, "storeId", "Store is required")
        if not data.sale_date:
            raise ValidationError("Sale date is required")
        currency = parse_currency(data.currency)

        store = self._stores.get_by_id(store_id)
        if not store:
            raise NotFoundError("Store not found")
        assert_currency_supported(store, currency)

        channels = build_channels(data.channels or {})
        total = channels.total()
        if total <= 0:
            raise ValidationError("Please enter at least one sale amount")
        cash_in_till = parse_minor_amount(data.cash_in_till, "Cash in till", default=0)

        return Sale(
            sale_id=sale_id,
            store_id=store_id,
            sale_date=parse_date(data.sale_date, "saleDate"),
            currency=currency,
            channels=channels,
            total=total,
            cash_in_till=cash_in_till,
            difference=total - cash_in_till,
            notes=optional_text(data.notes, max_length=255, field_name="notes"),
        )

    def record_daily_sale(self, data: SaleInput) -> Sale:
        """Create the day's sale, or overwrite it if the store already has one for that currency."""
        sale = self._sales.upsert_daily(self._build(0, data))
        logger.info(
            "Saved daily sale %s: store=%s %s %s total=%s difference=%s",
            sale.sale_id, sale.store_id, sale.sale_date.isoformat(), sale.currency.value, sale.total, sale.difference,
        )
        return sale

    def find_daily_sale(self, store_id: Any, currency: Any, day: Any) -> Optional[Sale]:
        return self._sales.find_daily(
            require_id(store_id, "storeId", "Store is required"),
            parse_currency(currency),
            parse_date(day, "date"),
        )

    def update_sale(self, sale_id: int, data: SaleInput) -> Sale:
        """Partial edit; channels not sent keep their amounts and the totals are worked out again."""
        current = self.get(sale_id)
        merged = merge_partial(SaleInput.from_record(current), data)
        merged = replace(merged, channels={**current.channels.as_dict(), **(data.channels or {})})
        sale = replace(self._build(current.sale_id, merged), created_at=current.created_at)
        self._sales.update(sale)
        logger.info("Updated sale %s: total=%s difference=%s", sale_id, sale.total, sale.difference)
        return sale

    def get(self, sale_id: int) -> Sale:
        sale = self._sales.get_by_id(int(sale_id))
        if not sale:
            raise NotFoundError("Sale not found")
        return sale

    def list(self, flt: Optional[SaleFilter] = None, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Sale]:
        return self._sales.list(flt or SaleFilter(), limit=limit)

    def delete(self, sale_id: int) -> None:
        if not self._sales.delete(int(sale_id)):
            raise NotFoundError("Sale not found")
        logger.info("Deleted sale %s", sale_id)

    def reconciliation(self, sale_id: int) -> Reconciliation:
        sale = self.get(sale_id)
        return reconcile(sale.total, sale.cash_in_till)
