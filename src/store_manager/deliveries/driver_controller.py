from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, arg_int, from_json, json_body, serialize
from ..container import Container
from .driver_service import DriverInput


def register(app: Flask, container: Container) -> None:
    drivers = container.driver_service

    @app.route("/api/drivers", methods=["GET"], endpoint="api_list_drivers")
    @api_errors("fetch drivers")
    def list_drivers():
        return jsonify(serialize(list(drivers.list_drivers(store_id=arg_int("storeId")))))

    @app.route("/api/drivers", methods=["POST"], endpoint="api_create_driver")
    @api_errors("create driver")
    def create_driver():
        return jsonify(serialize(drivers.create_driver(from_json(DriverInput, json_body())))), 201

    @app.route("/api/drivers/<int:driver_id>", methods=["GET"], endpoint="api_get_driver")
    @api_errors("fetch driver")
    def get_driver(driver_id: int):
        return jsonify(serialize(drivers.get_driver(driver_id)))

    @app.route("/api/drivers/<int:driver_id>", methods=["PUT", "PATCH"], endpoint="api_update_driver")
    @api_errors("update driver")
    def update_driver(driver_id: int):
        return jsonify(serialize(drivers.update_driver(driver_id, from_json(DriverInput, json_body()))))

    @app.route("/api/drivers/<int:driver_id>", methods=["DELETE"], endpoint="api_delete_driver")
    @api_errors("delete driver")
    def delete_driver(driver_id: int):
        drivers.delete_driver(driver_id)
        return jsonify({"success": True})
