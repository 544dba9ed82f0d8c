from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, arg_currency, arg_date, arg_int, camel, json_body, serialize
from ..container import Container
from ..core.exceptions import ValidationError
from .model import SaleChannels, SaleFilter
from .service import SaleInput


def _sale_input(body: dict) -> SaleInput:
    # channels arrive as top-level keys: cash, online, justEat, creditCard, ...
    channels = {}
    for name in SaleChannels.names():
        for key in (camel(name), name):
            if key in body:
                channels[name] = body[key]
                break
    return SaleInput(
        store_id=body.get("storeId"),
        sale_date=body.get("saleDate") or body.get("date"),
        currency=body.get("currency"),
        channels=channels,
        cash_in_till=body.get("cashInTill"),
        notes=body.get("notes"),
    )


def register(app: Flask, container: Container) -> None:
    sales = container.sale_service

    @app.route("/api/sales", methods=["GET"], endpoint="api_list_sales")
    @api_errors("fetch sales")
    def list_sales():
        flt = SaleFilter(
            store_id=arg_int("storeId"),
            currency=arg_currency(),
            start=arg_date("startDate"),
            end=arg_date("endDate"),
        )
        return jsonify(serialize(list(sales.list(flt))))

    @app.route("/api/sales", methods=["POST"], endpoint="api_create_sale")
    @api_errors("save sale")
    def create_sale():
        return jsonify(serialize(sales.record_daily_sale(_sale_input(json_body())))), 201

    @app.route("/api/sales/check", methods=["GET"], endpoint="api_check_sale")
    @api_errors("check sale")
    def check_sale():
        if not request.args.get("storeId") or not request.args.get("currency") or not request.args.get("date"):
            raise ValidationError("storeId, currency and date are required")
        sale = sales.find_daily_sale(request.args["storeId"], request.args["currency"], request.args["date"])
        return jsonify({"exists": sale is not None, "sale": serialize(sale)})

    @app.route("/api/sales/<int:sale_id>", methods=["GET"], endpoint="api_get_sale")
    @api_errors("fetch sale")
    def get_sale(sale_id: int):
        return jsonify(serialize(sales.get(sale_id)))

    @app.route("/api/sales/<int:sale_id>", methods=["PUT", "PATCH"], endpoint="api_update_sale")
    @api_errors("update sale")
    def update_sale(sale_id: int):
        return jsonify(serialize(sales.update_sale(sale_id, _sale_input(json_body()))))

    @app.route("/api/sales/<int:sale_id>", methods=["DELETE"], endpoint="api_delete_sale")
    @api_errors("delete sale")
    def delete_sale(sale_id: int):
        sales.delete(sale_id)
        return jsonify({"success": True})

    @app.route("/api/sales/<int:sale_id>/reconciliation", methods=["GET"], endpoint="api_sale_reconciliation")
    @api_errors("reconcile sale")
    def sale_reconciliation(sale_id: int):
        return jsonify(serialize(sales.reconciliation(sale_id)))
