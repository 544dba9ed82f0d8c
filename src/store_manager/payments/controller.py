from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, arg_currency, arg_date, arg_int, from_json, json_body, serialize
from ..container import Container
from ..core.exceptions import ValidationError
from ..reports.aggregation import payment_totals
from .model import PaymentFilter
from .service import PaymentInput, PaymentUpdate


def register(app: Flask, container: Container) -> None:
    payments = container.payment_service

    @app.route("/api/payments", methods=["GET"], endpoint="api_list_payments")
    @api_errors("fetch payments")
    def list_payments():
        employee_id = arg_int("employeeId")
        if employee_id is None:
            raise ValidationError("employeeId is required")
        rows = payments.list_for_employee(
            employee_id,
            start=arg_date("startDate"),
            end=arg_date("endDate"),
            currency=arg_currency(),
        )
        return jsonify({"payments": serialize(list(rows)), "totals": serialize(payment_totals(rows))})

    @app.route("/api/payments/all", methods=["GET"], endpoint="api_list_all_payments")
    @api_errors("fetch payments")
    def list_all_payments():
        flt = PaymentFilter(
            employee_id=arg_int("employeeId"),
            currency=arg_currency(),
            start=arg_date("startDate"),
            end=arg_date("endDate"),
        )
        rows = payments.list_all(flt)
        return jsonify({"payments": serialize(list(rows)), "totals": serialize(payment_totals(rows))})

    @app.route("/api/payments", methods=["POST"], endpoint="api_create_payment")
    @api_errors("create payment")
    def create_payment():
        return jsonify(serialize(payments.record_payment(from_json(PaymentInput, json_body())))), 201

    @app.route("/api/payments/<int:payment_id>", methods=["GET"], endpoint="api_get_payment")
    @api_errors("fetch payment")
    def get_payment(payment_id: int):
        return jsonify(serialize(payments.get(payment_id)))

    @app.route("/api/payments/<int:payment_id>", methods=["PUT", "PATCH"], endpoint="api_update_payment")
    @api_errors("update payment")
    def update_payment(payment_id: int):
        return jsonify(serialize(payments.update_payment(payment_id, from_json(PaymentUpdate, json_body()))))

    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="api_delete_payment")
    @api_errors("delete payment")
    def delete_payment(payment_id: int):
        payments.delete(payment_id)
        return jsonify({"success": True})
