from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Sequence

from ..common.validators import merge_partial, optional_text, require_non_empty
from ..core.enums import Currency
from ..core.exceptions import NotFoundError
from ..deliveries.driver_model import Driver
from ..deliveries.driver_repository import DriverRepository
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Store
from .repository import StoreRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreInput:
    name: Any = None
    supported_currencies: Optional[Sequence[Any]] = None
    default_currency: Any = None
    address: Any = None
    phone: Any = None
    manager_name: Any = None

    @classmethod
    def from_record(cls, store: Store) -> StoreInput:
        return cls(
            name=store.name,
            supported_currencies=sorted(c.value for c in store.supported_currencies),
            default_currency=store.default_currency.value,
            address=store.address,
            phone=store.phone,
            manager_name=store.manager_name,
        )


def normalize_currencies(supported: Optional[Iterable[Any]], default: Any) -> tuple[frozenset[Currency], Currency]:
    """Clean up a store's currency settings.

    Unknown codes are dropped, an empty set becomes ``{EUR}``, and the default
    is always made part of the supported set.
    """
    codes = {str(c).strip().upper() for c in (supported or ())}
    currencies = {c for c in Currency if c.value in codes} or {Currency.EUR}

    wanted = str(default or "").strip().upper()
    if wanted in {c.value for c in Currency}:
        default_currency = Currency(wanted)
    elif Currency.EUR in currencies:
        default_currency = Currency.EUR
    else:
        default_currency = min(currencies, key=lambda c: c.value)

    return frozenset(currencies | {default_currency}), default_currency


class StoreService:
    """Use cases: manage stores and who works at them."""

    def __init__(self, stores: StoreRepository, employees: EmployeeRepository, drivers: DriverRepository):
        self._stores = stores
        self._employees = employees
        self._drivers = drivers

    def _build(self, store_id: int, data: StoreInput) -> Store:
        supported, default = normalize_currencies(data.supported_currencies, data.default_currency)
        return Store(
            store_id=store_id,
            name=require_non_empty(data.name, "Store name"),
            supported_currencies=supported,
            default_currency=default,
            address=optional_text(data.address, max_length=255, field_name="address"),
            phone=optional_text(data.phone, max_length=40, field_name="phone"),
            manager_name=optional_text(data.manager_name, max_length=120, field_name="managerName"),
        )

    def create_store(self, data: StoreInput) -> Store:
        store = self._stores.create(self._build(0, data))
        logger.info("Created store %s (%s)", store.store_id, store.name)
        return store

    def update_store(self, store_id: int, data: StoreInput) -> Store:
        """Partial edit. A new currency set without a default keeps the old default only if it is still in the set."""
        current = self.get_store(store_id)
        merged = merge_partial(StoreInput.from_record(current), data)
        if data.supported_currencies is not None and data.default_currency is None:
            codes = {str(c).strip().upper() for c in data.supported_currencies}
            if current.default_currency.value not in codes:
                merged = replace(merged, default_currency=None)
        store = self._build(current.store_id, merged)
        self._stores.update(store)
        logger.info("Updated store %s", store_id)
        return store

    def get_store(self, store_id: int) -> Store:
        store = self._stores.get_by_id(int(store_id))
        if not store:
            raise NotFoundError("Store not found")
        return store

    def list_stores(self) -> Sequence[Store]:
        return self._stores.list_all()

    def delete_store(self, store_id: int) -> None:
        if not self._stores.delete(int(store_id)):
            raise NotFoundError("Store not found")
        logger.info("Deleted store %s", store_id)

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _require_driver(self, driver_id: int) -> Driver:
        driver = self._drivers.get_by_id(int(driver_id))
        if not driver:
            raise NotFoundError("Driver not found")
        return driver

    def assign_employee(self, store_id: int, employee_id: int) -> None:
        self.get_store(store_id)
        self._require_employee(employee_id)
        self._stores.assign_employee(int(store_id), int(employee_id))
        logger.info("Assigned employee %s to store %s", employee_id, store_id)

    def unassign_employee(self, store_id: int, employee_id: int) -> None:
        if not self._stores.unassign_employee(int(store_id), int(employee_id)):
            raise NotFoundError("Employee is not assigned to this store")
        logger.info("Unassigned employee %s from store %s", employee_id, store_id)

    def list_store_employees(self, store_id: int) -> Sequence[Employee]:
        self.get_store(store_id)
        return self._employees.list_all(store_id=int(store_id))

    def assign_driver(self, store_id: int, driver_id: int) -> None:
        self.get_store(store_id)
        self._require_driver(driver_id)
        self._stores.assign_driver(int(store_id), int(driver_id))
        logger.info("Assigned driver %s to store %s", driver_id, store_id)

    def unassign_driver(self, store_id: int, driver_id: int) -> None:
        if not self._stores.unassign_driver(int(store_id), int(driver_id)):
            raise NotFoundError("Driver is not assigned to this store")
        logger.info("Unassigned driver %s from store %s", driver_id, store_id)

    def list_store_drivers(self, store_id: int) -> Sequence[Driver]:
        self.get_store(store_id)
        return self._drivers.list_all(store_id=int(store_id))
