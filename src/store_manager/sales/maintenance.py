from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from ..core.enums import Currency
from .model import Sale

SaleKey = tuple[int, Currency, date]


def sale_key(sale: Sale) -> SaleKey:
    return (sale.store_id, Currency(sale.currency), sale.sale_date)


def group_sales_by_day(sales: Iterable[Sale]) -> dict[SaleKey, list[Sale]]:
    groups: dict[SaleKey, list[Sale]] = {}
    for sale in sales:
        groups.setdefault(sale_key(sale), []).append(sale)
    return groups


def find_duplicate_sales(sales: Iterable[Sale]) -> list[Sale]:
    """Sales that share a (store, currency, day) with an older one.

    The oldest record of each group is kept (by ``created_at``, then id);
    everything returned here is safe to delete.
    """
    duplicates: list[Sale] = []
    for group in group_sales_by_day(sales).values():
        if len(group) < 2:
            continue
        ordered = sorted(group, key=lambda s: (s.created_at is None, s.created_at or datetime.min, s.sale_id))
        duplicates.extend(ordered[1:])
    return duplicates
