from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, arg_currency, arg_date, arg_int, from_json, json_body, serialize
from ..container import Container
from .model import ExpenseFilter
from .service import ExpenseInput


def register(app: Flask, container: Container) -> None:
    expenses = container.expense_service

    @app.route("/api/expenses", methods=["GET"], endpoint="api_list_expenses")
    @api_errors("fetch expenses")
    def list_expenses():
        flt = ExpenseFilter(
            store_id=arg_int("storeId"),
            vendor_id=arg_int("vendorId"),
            currency=arg_currency(),
            start=arg_date("startDate"),
            end=arg_date("endDate"),
        )
        return jsonify(serialize(list(expenses.list(flt))))

    @app.route("/api/expenses", methods=["POST"], endpoint="api_create_expense")
    @api_errors("create expense")
    def create_expense():
        return jsonify(serialize(expenses.record_expense(from_json(ExpenseInput, json_body())))), 201

    @app.route("/api/expenses/<int:expense_id>", methods=["GET"], endpoint="api_get_expense")
    @api_errors("fetch expense")
    def get_expense(expense_id: int):
        return jsonify(serialize(expenses.get(expense_id)))

    @app.route("/api/expenses/<int:expense_id>", methods=["PUT", "PATCH"], endpoint="api_update_expense")
    @api_errors("update expense")
    def update_expense(expense_id: int):
        return jsonify(serialize(expenses.update_expense(expense_id, from_json(ExpenseInput, json_body()))))

    @app.route("/api/expenses/<int:expense_id>/pay", methods=["POST"], endpoint="api_pay_expense")
    @api_errors("mark expense as paid")
    def pay_expense(expense_id: int):
        return jsonify(serialize(expenses.mark_paid(expense_id)))

    @app.route("/api/expenses/<int:expense_id>", methods=["DELETE"], endpoint="api_delete_expense")
    @api_errors("delete expense")
    def delete_expense(expense_id: int):
        expenses.delete(expense_id)
        return jsonify({"success": True})
