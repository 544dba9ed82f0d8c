from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify

from ..common.durations import combine_shift
from ..common.http import api_errors, arg_date, arg_int, from_json, json_body, serialize
from ..common.validators import parse_date
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceFilter
from .service import AttendanceUpdate, NewAttendance


def _clock(value, field_name: str):
    try:
        return datetime.strptime(str(value).strip()[:5], "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")


def _with_shift_times(body: dict) -> dict:
    """Accept ``date`` + ``startTime``/``endTime`` as an alternative to checkIn/checkOut."""
    if body.get("checkIn") or not (body.get("date") and body.get("startTime") and body.get("endTime")):
        return body
    check_in, check_out = combine_shift(
        parse_date(body["date"], "date"),
        _clock(body["startTime"], "startTime"),
        _clock(body["endTime"], "endTime"),
    )
    return {**body, "checkIn": check_in, "checkOut": check_out}


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="api_list_attendance")
    @api_errors("fetch attendance")
    def list_attendance():
        flt = AttendanceFilter(
            employee_id=arg_int("employeeId"),
            store_id=arg_int("storeId"),
            start=arg_date("startDate"),
            end=arg_date("endDate"),
        )
        return jsonify(serialize(list(attendance.list(flt))))

    @app.route("/api/attendance", methods=["POST"], endpoint="api_create_attendance")
    @api_errors("create attendance")
    def create_attendance():
        record = attendance.record_shift(from_json(NewAttendance, _with_shift_times(json_body())))
        return jsonify(serialize(record)), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="api_get_attendance")
    @api_errors("fetch attendance")
    def get_attendance(attendance_id: int):
        return jsonify(serialize(attendance.get(attendance_id)))

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT", "PATCH"], endpoint="api_update_attendance")
    @api_errors("update attendance")
    def update_attendance(attendance_id: int):
        record = attendance.update_shift(attendance_id, from_json(AttendanceUpdate, _with_shift_times(json_body())))
        return jsonify(serialize(record))

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="api_delete_attendance")
    @api_errors("delete attendance")
    def delete_attendance(attendance_id: int):
        attendance.delete(attendance_id)
        return jsonify({"success": True})
