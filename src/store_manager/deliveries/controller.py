from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, arg_date, arg_int, from_json, json_body, serialize
from ..container import Container
from .model import DeliveryFilter
from .service import DeliveryInput


def register(app: Flask, container: Container) -> None:
    deliveries = container.delivery_service

    @app.route("/api/deliveries", methods=["GET"], endpoint="api_list_deliveries")
    @api_errors("fetch deliveries")
    def list_deliveries():
        flt = DeliveryFilter(
            driver_id=arg_int("driverId"),
            store_id=arg_int("storeId"),
            start=arg_date("startDate"),
            end=arg_date("endDate"),
        )
        return jsonify(serialize(list(deliveries.list(flt))))

    @app.route("/api/deliveries", methods=["POST"], endpoint="api_create_delivery")
    @api_errors("create delivery")
    def create_delivery():
        record = deliveries.record_delivery(from_json(DeliveryInput, json_body()))
        return jsonify(serialize(record)), 201

    @app.route("/api/deliveries/<int:delivery_id>", methods=["GET"], endpoint="api_get_delivery")
    @api_errors("fetch delivery")
    def get_delivery(delivery_id: int):
        return jsonify(serialize(deliveries.get(delivery_id)))

    @app.route("/api/deliveries/<int:delivery_id>", methods=["PUT", "PATCH"], endpoint="api_update_delivery")
    @api_errors("update delivery")
    def update_delivery(delivery_id: int):
        record = deliveries.update_delivery(delivery_id, from_json(DeliveryInput, json_body()))
        return jsonify(serialize(record))

    @app.route("/api/deliveries/<int:delivery_id>", methods=["DELETE"], endpoint="api_delete_delivery")
    @api_errors("delete delivery")
    def delete_delivery(delivery_id: int):
        deliveries.delete(delivery_id)
        return jsonify({"success": True})
