from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

import pytest

from store_manager.attendance.model import AttendanceFilter, AttendanceRecord
from store_manager.container import Container, wire
from store_manager.core.enums import Currency, ExpenseStatus, WageType
from store_manager.core.exceptions import ConflictError
from store_manager.deliveries.driver_model import Driver
from store_manager.deliveries.model import DeliveryFilter
from store_manager.employees.model import Employee
from store_manager.expenses.model import ExpenseFilter
from store_manager.expenses.vendor_model import Vendor
from store_manager.payments.model import PaymentFilter
from store_manager.sales.model import Sale, SaleFilter
from store_manager.stores.model import Store


class InMemoryTable:
    id_field = "id"

    def __init__(self):
        self.rows: dict[int, object] = {}
        self._id = 0
        self.writes = 0

    def get_by_id(self, entity_id: int):
        return self.rows.get(int(entity_id))

    def create(self, entity):
        self._id += 1
        self.writes += 1
        created = replace(entity, **{self.id_field: self._id})
        self.rows[self._id] = created
        return created

    def update(self, entity) -> bool:
        key = getattr(entity, self.id_field)
        if key not in self.rows:
            return False
        self.writes += 1
        self.rows[key] = entity
        return True

    def delete(self, entity_id: int) -> bool:
        self.writes += 1
        return self.rows.pop(int(entity_id), None) is not None


def _limited(items, limit: Optional[int]):
    return items if limit is None else items[:limit]


def _in_range(day: date, start: Optional[date], end: Optional[date]) -> bool:
    return (start is None or day >= start) and (end is None or day <= end)


class InMemoryStores(InMemoryTable):
    id_field = "store_id"

    def __init__(self):
        super().__init__()
        self.employee_links: set[tuple[int, int]] = set()
        self.driver_links: set[tuple[int, int]] = set()

    def list_all(self):
        return sorted(self.rows.values(), key=lambda s: s.name)

    def assign_employee(self, store_id: int, employee_id: int) -> None:
        self.employee_links.add((store_id, employee_id))

    def unassign_employee(self, store_id: int, employee_id: int) -> bool:
        if (store_id, employee_id) not in self.employee_links:
            return False
        self.employee_links.discard((store_id, employee_id))
        return True

    def assign_driver(self, store_id: int, driver_id: int) -> None:
        self.driver_links.add((store_id, driver_id))

    def unassign_driver(self, store_id: int, driver_id: int) -> bool:
        if (store_id, driver_id) not in self.driver_links:
            return False
        self.driver_links.discard((store_id, driver_id))
        return True


class InMemoryEmployees(InMemoryTable):
    id_field = "employee_id"

    def __init__(self, stores: InMemoryStores):
        super().__init__()
        self._stores = stores

    def list_all(self, *, store_id: Optional[int] = None):
        rows = self.rows.values()
        if store_id is not None:
            ids = {e for s, e in self._stores.employee_links if s == store_id}
            rows = [r for r in rows if r.employee_id in ids]
        return sorted(rows, key=lambda e: e.name)


class InMemoryDrivers(InMemoryTable):
    id_field = "driver_id"

    def __init__(self, stores: InMemoryStores):
        super().__init__()
        self._stores = stores

    def list_all(self, *, store_id: Optional[int] = None):
        rows = self.rows.values()
        if store_id is not None:
            ids = {d for s, d in self._stores.driver_links if s == store_id}
            rows = [r for r in rows if r.driver_id in ids]
        return sorted(rows, key=lambda d: d.name)


class InMemoryVendors(InMemoryTable):
    id_field = "vendor_id"

    def list_all(self):
        return sorted(self.rows.values(), key=lambda v: v.name)


class InMemoryAttendance(InMemoryTable):
    id_field = "attendance_id"

    def list(self, flt: AttendanceFilter, *, limit: Optional[int] = None):
        items = [
            r
            for r in self.rows.values()
            if (flt.employee_id is None or r.employee_id == flt.employee_id)
            and (flt.store_id is None or r.store_id == flt.store_id)
            and _in_range(r.check_in.date(), flt.start, flt.end)
        ]
        items.sort(key=lambda r: r.check_in, reverse=True)
        return _limited(items, limit)


class InMemoryDeliveries(InMemoryTable):
    id_field = "delivery_id"

    def list(self, flt: DeliveryFilter, *, limit: Optional[int] = None):
        items = [
            r
            for r in self.rows.values()
            if (flt.driver_id is None or r.driver_id == flt.driver_id)
            and (flt.store_id is None or r.store_id == flt.store_id)
            and _in_range(r.delivery_date, flt.start, flt.end)
        ]
        items.sort(key=lambda r: (r.delivery_date, r.delivery_id), reverse=True)
        return _limited(items, limit)


class InMemorySales(InMemoryTable):
    """Keeps the (store, currency, day) key unique the way the UNIQUE index does."""

    id_field = "sale_id"

    def __init__(self):
        super().__init__()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _stamp(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    @staticmethod
    def _key(sale: Sale):
        return (sale.store_id, sale.currency, sale.sale_date)

    def find_daily(self, store_id, currency, sale_date):
        for sale in self.rows.values():
            if self._key(sale) == (store_id, currency, sale_date):
                return sale
        return None

    def list(self, flt: SaleFilter, *, limit: Optional[int] = None):
        items = [
            s
            for s in self.rows.values()
            if (flt.store_id is None or s.store_id == flt.store_id)
            and (flt.currency is None or s.currency == flt.currency)
            and _in_range(s.sale_date, flt.start, flt.end)
        ]
        items.sort(key=lambda s: (s.sale_date, s.sale_id), reverse=True)
        return _limited(items, limit)

    def upsert_daily(self, sale: Sale) -> Sale:
        existing = self.find_daily(sale.store_id, sale.currency, sale.sale_date)
        self.writes += 1
        if existing:
            stored = replace(sale, sale_id=existing.sale_id, created_at=existing.created_at)
        else:
            self._id += 1
            stored = replace(sale, sale_id=self._id, created_at=self._stamp())
        self.rows[stored.sale_id] = stored
        return stored

    def update(self, sale: Sale) -> bool:
        other = self.find_daily(sale.store_id, sale.currency, sale.sale_date)
        if other and other.sale_id != sale.sale_id:
            raise ConflictError("A record with this information already exists")
        return super().update(sale)

    def delete_many(self, sale_ids) -> int:
        return sum(1 for i in sale_ids if self.rows.pop(int(i), None) is not None)

    def add_raw(self, sale: Sale) -> Sale:
        """Insert bypassing the unique key (rows written before the key existed)."""
        self._id += 1
        stored = replace(sale, sale_id=self._id, created_at=sale.created_at or self._stamp())
        self.rows[self._id] = stored
        return stored


class InMemoryExpenses(InMemoryTable):
    id_field = "expense_id"

    def list(self, flt: ExpenseFilter, *, limit: Optional[int] = None):
        items = [
            e
            for e in self.rows.values()
            if (flt.store_id is None or e.store_id == flt.store_id)
            and (flt.vendor_id is None or e.vendor_id == flt.vendor_id)
            and (flt.currency is None or e.currency == flt.currency)
            and _in_range(e.expense_date, flt.start, flt.end)
        ]
        items.sort(key=lambda e: (e.expense_date, e.expense_id), reverse=True)
        return _limited(items, limit)

    def set_status(self, expense_id: int, status: ExpenseStatus) -> bool:
        expense = self.rows.get(int(expense_id))
        if not expense:
            return False
        self.rows[expense.expense_id] = replace(expense, status=status)
        return True


class InMemoryPayments(InMemoryTable):
    id_field = "payment_id"

    def list(self, flt: PaymentFilter, *, limit: Optional[int] = None):
        items = [
            p
            for p in self.rows.values()
            if (flt.employee_id is None or p.employee_id == flt.employee_id)
            and (flt.currency is None or p.currency == flt.currency)
            and _in_range(p.paid_date, flt.start, flt.end)
        ]
        items.sort(key=lambda p: (p.paid_date, p.payment_id), reverse=True)
        return _limited(items, limit)


@dataclass
class Repos:
    stores: InMemoryStores
    employees: InMemoryEmployees
    drivers: InMemoryDrivers
    vendors: InMemoryVendors
    attendance: InMemoryAttendance
    deliveries: InMemoryDeliveries
    sales: InMemorySales
    expenses: InMemoryExpenses
    payments: InMemoryPayments

    def add_store(self, name="Main St", currencies=(Currency.EUR,), default=None) -> Store:
        return self.stores.create(
            Store(
                store_id=0,
                name=name,
                supported_currencies=frozenset(currencies),
                default_currency=default or sorted(currencies, key=lambda c: c.value)[0],
            )
        )

    def add_employee(self, name="Alice", wage_type=WageType.HOURLY, **rates) -> Employee:
        rates = {k: Decimal(str(v)) for k, v in rates.items()}
        return self.employees.create(Employee(employee_id=0, name=name, wage_type=wage_type, **rates))

    def add_driver(self, name="Dan") -> Driver:
        return self.drivers.create(Driver(driver_id=0, name=name))

    def add_vendor(self, name="Fresh Foods") -> Vendor:
        return self.vendors.create(Vendor(vendor_id=0, name=name))

    def add_shift(self, employee_id, store_id, check_in, hours, amount, currency=Currency.EUR) -> AttendanceRecord:
        return self.attendance.create(
            AttendanceRecord(
                attendance_id=0,
                employee_id=employee_id,
                store_id=store_id,
                check_in=check_in,
                check_out=check_in + timedelta(hours=float(hours)),
                currency=currency,
                hours_worked=Decimal(str(hours)),
                amount_to_pay=amount,
            )
        )

    def total_writes(self) -> int:
        return sum(
            t.writes
            for t in (
                self.stores, self.employees, self.drivers, self.vendors, self.attendance,
                self.deliveries, self.sales, self.expenses, self.payments,
            )
        )


@pytest.fixture
def repos() -> Repos:
    stores = InMemoryStores()
    return Repos(
        stores=stores,
        employees=InMemoryEmployees(stores),
        drivers=InMemoryDrivers(stores),
        vendors=InMemoryVendors(),
        attendance=InMemoryAttendance(),
        deliveries=InMemoryDeliveries(),
        sales=InMemorySales(),
        expenses=InMemoryExpenses(),
        payments=InMemoryPayments(),
    )


@pytest.fixture
def container(repos: Repos) -> Container:
    return wire(
        stores=repos.stores,
        employees=repos.employees,
        drivers=repos.drivers,
        vendors=repos.vendors,
        attendance=repos.attendance,
        deliveries=repos.deliveries,
        sales=repos.sales,
        expenses=repos.expenses,
        payments=repos.payments,
    )


@pytest.fixture
def client(container: Container, monkeypatch):
    from store_manager.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
