from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, arg_currency, arg_date, arg_int, serialize
from ..container import Container
from .export import PAYMENT_COLUMNS, payment_rows, to_csv_bytes, to_xlsx_bytes
from .service import default_period

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _period():
        start, end = default_period()
        return arg_date("startDate") or start, arg_date("endDate") or end

    def _payments_report():
        start, end = _period()
        return reports.payments_report(
            start=start,
            end=end,
            employee_id=arg_int("employeeId"),
            currency=arg_currency(),
        )

    def _attachment(payload: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="api_report_dashboard")
    @api_errors("build dashboard")
    def dashboard():
        start, end = _period()
        return jsonify(serialize(reports.build_dashboard(start=start, end=end, store_id=arg_int("storeId"))))

    @app.route("/api/reports/payments", methods=["GET"], endpoint="api_report_payments")
    @api_errors("build payments report")
    def payments_report():
        report = _payments_report()
        return jsonify(
            {
                "start": report.start.isoformat(),
                "end": report.end.isoformat(),
                "totals": serialize(report.totals),
                "byEmployee": serialize(list(report.by_employee)),
                "payments": serialize(list(report.payments)),
            }
        )

    @app.route("/api/reports/payments.csv", methods=["GET"], endpoint="api_report_payments_csv")
    @api_errors("export payments")
    def payments_csv():
        report = _payments_report()
        filename = f"payments_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.csv"
        payload = to_csv_bytes(payment_rows(report), PAYMENT_COLUMNS)
        return _attachment(payload, mimetype="text/csv", filename=filename)

    @app.route("/api/reports/payments.xlsx", methods=["GET"], endpoint="api_report_payments_xlsx")
    @api_errors("export payments")
    def payments_xlsx():
        report = _payments_report()
        filename = f"payments_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.xlsx"
        payload = to_xlsx_bytes(payment_rows(report), PAYMENT_COLUMNS, sheet_name="Payments")
        return _attachment(payload, mimetype=XLSX_MIMETYPE, filename=filename)
