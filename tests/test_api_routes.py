import io
from datetime import date

import pandas as pd

from store_manager.core.enums import Currency, PaymentMethod, WageType
from store_manager.payments.model import Payment


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_store_round_trip_uses_camel_case(client):
    resp = client.post("/api/stores", json={"name": "Dock Rd", "supportedCurrencies": ["GBP", "eur"],
                                            "defaultCurrency": "GBP"})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["supportedCurrencies"] == ["EUR", "GBP"]
    assert body["defaultCurrency"] == "GBP"

    listed = client.get("/api/stores").get_json()
    assert [s["name"] for s in listed] == ["Dock Rd"]


def test_validation_and_not_found_map_to_status_codes(client):
    assert client.post("/api/stores", json={"name": ""}).status_code == 400
    assert client.post("/api/stores", data="nope", content_type="text/plain").get_json() == {
        "error": "Request body must be a JSON object"
    }
    missing = client.get("/api/stores/99")
    assert missing.status_code == 404
    assert missing.get_json() == {"error": "Store not found"}


def test_attendance_from_date_and_clock_times(client, repos):
    store = repos.add_store()
    emp = repos.add_employee(hourly_rate_eur=15)

    resp = client.post("/api/attendance", json={
        "employeeId": emp.employee_id,
        "storeId": store.store_id,
        "date": "2024-03-01",
        "startTime": "09:00",
        "endTime": "17:00",
        "currency": "EUR",
    })

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["amountToPay"] == 12000
    assert body["hoursWorked"] == 8.0
    assert body["checkIn"] == "2024-03-01T09:00:00Z"


def test_attendance_in_unsupported_currency_is_a_400(client, repos):
    store = repos.add_store()
    emp = repos.add_employee(hourly_rate_gbp=12)

    resp = client.post("/api/attendance", json={
        "employeeId": emp.employee_id,
        "storeId": store.store_id,
        "checkIn": "2024-03-01T09:00:00Z",
        "checkOut": "2024-03-01T17:00:00Z",
        "currency": "GBP",
    })

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "This store does not support GBP"}
    assert repos.attendance.rows == {}


def test_sale_upsert_check_and_reconciliation(client, repos):
    store = repos.add_store()
    payload = {"storeId": store.store_id, "saleDate": "2024-03-01", "currency": "EUR",
               "cash": 1000, "justEat": 500, "cashInTill": 1400}

    first = client.post("/api/sales", json=payload).get_json()
    second = client.post("/api/sales", json={**payload, "cashInTill": 1500}).get_json()

    assert first["saleId"] == second["saleId"]
    assert second["channels"]["justEat"] == 500
    assert second["difference"] == 0

    check = client.get(f"/api/sales/check?storeId={store.store_id}&currency=EUR&date=2024-03-01").get_json()
    assert check["exists"] is True

    missing = client.get(f"/api/sales/check?storeId={store.store_id}&currency=EUR&date=2024-03-02").get_json()
    assert missing == {"exists": False, "sale": None}

    result = client.get(f"/api/sales/{first['saleId']}/reconciliation").get_json()
    assert result == {"difference": 0, "status": "BALANCED", "message": "Balanced"}


def test_payments_need_an_employee_filter(client):
    resp = client.get("/api/payments")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "employeeId is required"}


def test_payments_listing_with_totals(client, repos):
    emp = repos.add_employee()
    resp = client.post("/api/payments", json={"employeeId": emp.employee_id, "amountPaid": 5000, "currency": "EUR",
                                              "paymentMethod": "ACCOUNT", "paidDate": "2024-03-02"})
    assert resp.status_code == 201

    body = client.get(f"/api/payments?employeeId={emp.employee_id}").get_json()
    assert body["totals"] == {"EUR": 5000}
    assert body["payments"][0]["paymentMethod"] == "ACCOUNT"


def test_employee_summary_route(client, repos):
    emp = repos.add_employee("Bob", WageType.FIXED, daily_wage_eur=50)
    body = client.get(f"/api/employees/{emp.employee_id}/summary").get_json()
    assert body["employee"]["wageType"] == "FIXED"
    assert body["balance"] == {}


def test_dashboard_route(client, repos):
    repos.add_store()
    body = client.get("/api/reports/dashboard?startDate=2024-03-01&endDate=2024-03-31").get_json()
    assert body["start"] == "2024-03-01"
    assert body["counts"]["stores"] == 1
    assert body["profit"] == {}

    bad = client.get("/api/reports/dashboard?startDate=2024-03-31&endDate=2024-03-01")
    assert bad.status_code == 400


def test_payment_exports(client, repos):
    emp = repos.add_employee("Alice")
    repos.payments.create(Payment(payment_id=0, employee_id=emp.employee_id, amount_paid=1234, currency=Currency.GBP,
                                  payment_method=PaymentMethod.CASH, paid_date=date(2024, 3, 5)))
    query = "startDate=2024-03-01&endDate=2024-03-31"

    csv_resp = client.get(f"/api/reports/payments.csv?{query}")
    assert csv_resp.mimetype == "text/csv"
    assert "payments_20240301_20240331.csv" in csv_resp.headers["Content-Disposition"]
    assert "Alice,12.34,GBP,CASH" in csv_resp.data.decode("utf-8-sig")

    xlsx_resp = client.get(f"/api/reports/payments.xlsx?{query}")
    assert xlsx_resp.status_code == 200
    assert xlsx_resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    sheet = pd.read_excel(io.BytesIO(xlsx_resp.data), sheet_name="Payments", dtype=str)
    assert list(sheet.columns) == ["Date", "Employee", "Amount", "Currency", "Method", "Notes"]
    assert sheet.loc[0, ["Date", "Employee", "Amount", "Currency", "Method"]].tolist() == [
        "2024-03-05", "Alice", "12.34", "GBP", "CASH",
    ]

    summary = client.get(f"/api/reports/payments?{query}").get_json()
    assert summary["totals"] == {"GBP": 1234}
    assert summary["byEmployee"][0]["employeeName"] == "Alice"


def test_vendor_expense_and_pay(client, repos):
    store = repos.add_store()
    vendor = client.post("/api/vendors", json={"name": "Fresh Foods"}).get_json()

    created = client.post("/api/expenses", json={"storeId": store.store_id, "vendorId": vendor["vendorId"],
                                                 "amount": 4200, "currency": "EUR", "expenseDate": "2024-03-01"})
    assert created.status_code == 201
    expense = created.get_json()
    assert expense["status"] == "RAISED"

    paid = client.post(f"/api/expenses/{expense['expenseId']}/pay").get_json()
    assert paid["status"] == "PAID"


def test_driver_and_delivery_run(client, repos):
    store = repos.add_store()
    driver = client.post("/api/drivers", json={"name": "Dan"}).get_json()
    assert client.post(f"/api/stores/{store.store_id}/drivers", json={"driverId": driver["driverId"]}).status_code == 201

    resp = client.post("/api/deliveries", json={
        "driverId": driver["driverId"],
        "storeId": store.store_id,
        "deliveryDate": "2024-03-01",
        "checkIn": "2024-03-01T17:00:00Z",
        "checkOut": "2024-03-01T19:00:00Z",
        "numberOfDeliveries": 9,
        "currency": "EUR",
    })

    assert resp.status_code == 201
    assert resp.get_json()["hoursWorked"] == 2.0
    assert [d["name"] for d in client.get(f"/api/stores/{store.store_id}/drivers").get_json()] == ["Dan"]


def test_patch_employee_keeps_wage_settings(client, repos):
    emp = repos.add_employee("Bob", WageType.FIXED, daily_wage_eur=50)

    resp = client.patch(f"/api/employees/{emp.employee_id}", json={"name": "Robert"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["name"] == "Robert"
    assert body["wageType"] == "FIXED"
    assert body["dailyWageEur"] == 50.0


def test_put_store_without_currencies_keeps_them(client, repos):
    store = repos.add_store("Dock Rd", currencies=(Currency.GBP,))

    body = client.put(f"/api/stores/{store.store_id}", json={"name": "Dock Road"}).get_json()

    assert body["supportedCurrencies"] == ["GBP"]
    assert body["defaultCurrency"] == "GBP"


def test_patch_sale_cash_in_till_only(client, repos):
    store = repos.add_store()
    created = client.post("/api/sales", json={"storeId": store.store_id, "saleDate": "2024-03-01", "currency": "EUR",
                                              "cash": 1000, "online": 500, "cashInTill": 1400}).get_json()

    resp = client.patch(f"/api/sales/{created['saleId']}", json={"cashInTill": 1500})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["total"] == 1500
    assert body["difference"] == 0
    assert body["saleDate"] == "2024-03-01"


def test_edit_payment(client, repos):
    emp = repos.add_employee()
    payment = client.post("/api/payments", json={"employeeId": emp.employee_id, "amountPaid": 5000, "currency": "EUR",
                                                 "paymentMethod": "CASH", "paidDate": "2024-03-02"}).get_json()
    url = f"/api/payments/{payment['paymentId']}"

    patched = client.patch(url, json={"amountPaid": 4500, "notes": "short week"})
    assert patched.status_code == 200
    assert patched.get_json()["amountPaid"] == 4500
    assert patched.get_json()["paymentMethod"] == "CASH"

    put = client.put(url, json={"paymentMethod": "ACCOUNT", "paidDate": "2024-03-04"})
    assert put.get_json()["paidDate"] == "2024-03-04"
    assert put.get_json()["notes"] == "short week"

    rejected = client.patch(url, json={"amountPaid": 0})
    assert rejected.status_code == 400
    assert rejected.get_json() == {"error": "amountPaid must be greater than 0"}
    assert client.patch("/api/payments/99", json={"amountPaid": 1}).status_code == 404
