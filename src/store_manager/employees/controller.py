from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, arg_int, from_json, json_body, serialize
from ..container import Container
from .service import EmployeeInput


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="api_list_employees")
    @api_errors("fetch employees")
    def list_employees():
        return jsonify(serialize(list(employees.list_employees(store_id=arg_int("storeId")))))

    @app.route("/api/employees", methods=["POST"], endpoint="api_create_employee")
    @api_errors("create employee")
    def create_employee():
        employee = employees.create_employee(from_json(EmployeeInput, json_body()))
        return jsonify(serialize(employee)), 201

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="api_get_employee")
    @api_errors("fetch employee")
    def get_employee(employee_id: int):
        return jsonify(serialize(employees.get_employee(employee_id)))

    @app.route("/api/employees/<int:employee_id>", methods=["PUT", "PATCH"], endpoint="api_update_employee")
    @api_errors("update employee")
    def update_employee(employee_id: int):
        employee = employees.update_employee(employee_id, from_json(EmployeeInput, json_body()))
        return jsonify(serialize(employee))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="api_delete_employee")
    @api_errors("delete employee")
    def delete_employee(employee_id: int):
        employees.delete_employee(employee_id)
        return jsonify({"success": True})

    @app.route("/api/employees/<int:employee_id>/summary", methods=["GET"], endpoint="api_employee_summary")
    @api_errors("fetch employee summary")
    def employee_summary(employee_id: int):
        summary = container.attendance_service.employee_summary(employee_id)
        return jsonify(serialize(summary))
