from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, from_json, json_body, serialize
from ..common.validators import require_id
from ..container import Container
from .service import StoreInput


def register(app: Flask, container: Container) -> None:
    stores = container.store_service

    @app.route("/api/stores", methods=["GET"], endpoint="api_list_stores")
    @api_errors("fetch stores")
    def list_stores():
        return jsonify(serialize(list(stores.list_stores())))

    @app.route("/api/stores", methods=["POST"], endpoint="api_create_store")
    @api_errors("create store")
    def create_store():
        store = stores.create_store(from_json(StoreInput, json_body()))
        return jsonify(serialize(store)), 201

    @app.route("/api/stores/<int:store_id>", methods=["GET"], endpoint="api_get_store")
    @api_errors("fetch store")
    def get_store(store_id: int):
        return jsonify(serialize(stores.get_store(store_id)))

    @app.route("/api/stores/<int:store_id>", methods=["PUT", "PATCH"], endpoint="api_update_store")
    @api_errors("update store")
    def update_store(store_id: int):
        store = stores.update_store(store_id, from_json(StoreInput, json_body()))
        return jsonify(serialize(store))

    @app.route("/api/stores/<int:store_id>", methods=["DELETE"], endpoint="api_delete_store")
    @api_errors("delete store")
    def delete_store(store_id: int):
        stores.delete_store(store_id)
        return jsonify({"success": True})

    @app.route("/api/stores/<int:store_id>/employees", methods=["GET"], endpoint="api_store_employees")
    @api_errors("fetch store employees")
    def store_employees(store_id: int):
        return jsonify(serialize(list(stores.list_store_employees(store_id))))

    @app.route("/api/stores/<int:store_id>/employees", methods=["POST"], endpoint="api_assign_employee")
    @api_errors("assign employee")
    def assign_employee(store_id: int):
        employee_id = require_id(json_body().get("employeeId"), "employeeId", "Employee is required")
        stores.assign_employee(store_id, employee_id)
        return jsonify({"success": True}), 201

    @app.route(
        "/api/stores/<int:store_id>/employees/<int:employee_id>",
        methods=["DELETE"],
        endpoint="api_unassign_employee",
    )
    @api_errors("unassign employee")
    def unassign_employee(store_id: int, employee_id: int):
        stores.unassign_employee(store_id, employee_id)
        return jsonify({"success": True})

    @app.route("/api/stores/<int:store_id>/drivers", methods=["GET"], endpoint="api_store_drivers")
    @api_errors("fetch store drivers")
    def store_drivers(store_id: int):
        return jsonify(serialize(list(stores.list_store_drivers(store_id))))

    @app.route("/api/stores/<int:store_id>/drivers", methods=["POST"], endpoint="api_assign_driver")
    @api_errors("assign driver")
    def assign_driver(store_id: int):
        driver_id = require_id(json_body().get("driverId"), "driverId", "Driver is required")
        stores.assign_driver(store_id, driver_id)
        return jsonify({"success": True}), 201

    @app.route(
        "/api/stores/<int:store_id>/drivers/<int:driver_id>",
        methods=["DELETE"],
        endpoint="api_unassign_driver",
    )
    @api_errors("unassign driver")
    def unassign_driver(store_id: int, driver_id: int):
        stores.unassign_driver(store_id, driver_id)
        return jsonify({"success": True})
