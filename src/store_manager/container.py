from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .deliveries.driver_repository import DriverRepository
from .deliveries.driver_service import DriverService
from .deliveries.mysql_delivery_repository import MySQLDeliveryRepository
from .deliveries.mysql_driver_repository import MySQLDriverRepository
from .deliveries.repository import DeliveryRepository
from .deliveries.service import DeliveryService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.mysql_vendor_repository import MySQLVendorRepository
from .expenses.repository import ExpenseRepository
from .expenses.service import ExpenseService
from .expenses.vendor_repository import VendorRepository
from .expenses.vendor_service import VendorService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .payroll.calculator.factory import WageCalculatorFactory
from .reports.service import ReportService
from .sales.mysql_sale_repository import MySQLSaleRepository
from .sales.repository import SaleRepository
from .sales.service import SaleService
from .stores.mysql_store_repository import MySQLStoreRepository
from .stores.repository import StoreRepository
from .stores.service import StoreService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    stores_repo: StoreRepository
    employees_repo: EmployeeRepository
    drivers_repo: DriverRepository
    vendors_repo: VendorRepository
    attendance_repo: AttendanceRepository
    deliveries_repo: DeliveryRepository
    sales_repo: SaleRepository
    expenses_repo: ExpenseRepository
    payments_repo: PaymentRepository

    store_service: StoreService
    employee_service: EmployeeService
    driver_service: DriverService
    vendor_service: VendorService
    attendance_service: AttendanceService
    delivery_service: DeliveryService
    sale_service: SaleService
    expense_service: ExpenseService
    payment_service: PaymentService
    report_service: ReportService


def wire(
    *,
    stores: StoreRepository,
    employees: EmployeeRepository,
    drivers: DriverRepository,
    vendors: VendorRepository,
    attendance: AttendanceRepository,
    deliveries: DeliveryRepository,
    sales: SaleRepository,
    expenses: ExpenseRepository,
    payments: PaymentRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build every service on top of the given repositories."""
    return Container(
        conn=conn,
        stores_repo=stores,
        employees_repo=employees,
        drivers_repo=drivers,
        vendors_repo=vendors,
        attendance_repo=attendance,
        deliveries_repo=deliveries,
        sales_repo=sales,
        expenses_repo=expenses,
        payments_repo=payments,
        store_service=StoreService(stores, employees, drivers),
        employee_service=EmployeeService(employees),
        driver_service=DriverService(drivers),
        vendor_service=VendorService(vendors),
        attendance_service=AttendanceService(
            attendance,
            employees,
            stores,
            payments,
            calculator_factory=WageCalculatorFactory(),
        ),
        delivery_service=DeliveryService(deliveries, drivers, stores),
        sale_service=SaleService(sales, stores),
        expense_service=ExpenseService(expenses, vendors, stores),
        payment_service=PaymentService(payments, employees),
        report_service=ReportService(
            stores=stores,
            employees=employees,
            drivers=drivers,
            vendors=vendors,
            attendance=attendance,
            sales=sales,
            expenses=expenses,
            deliveries=deliveries,
            payments=payments,
        ),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire(
        stores=MySQLStoreRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        drivers=MySQLDriverRepository(conn),
        vendors=MySQLVendorRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        deliveries=MySQLDeliveryRepository(conn),
        sales=MySQLSaleRepository(conn),
        expenses=MySQLExpenseRepository(conn),
        payments=MySQLPaymentRepository(conn),
        conn=conn,
    )
