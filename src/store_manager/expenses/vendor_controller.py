from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, from_json, json_body, serialize
from ..container import Container
from .vendor_service import VendorInput


def register(app: Flask, container: Container) -> None:
    vendors = container.vendor_service

    @app.route("/api/vendors", methods=["GET"], endpoint="api_list_vendors")
    @api_errors("fetch vendors")
    def list_vendors():
        return jsonify(serialize(list(vendors.list_vendors())))

    @app.route("/api/vendors", methods=["POST"], endpoint="api_create_vendor")
    @api_errors("create vendor")
    def create_vendor():
        return jsonify(serialize(vendors.create_vendor(from_json(VendorInput, json_body())))), 201

    @app.route("/api/vendors/<int:vendor_id>", methods=["GET"], endpoint="api_get_vendor")
    @api_errors("fetch vendor")
    def get_vendor(vendor_id: int):
        return jsonify(serialize(vendors.get_vendor(vendor_id)))

    @app.route("/api/vendors/<int:vendor_id>", methods=["PUT", "PATCH"], endpoint="api_update_vendor")
    @api_errors("update vendor")
    def update_vendor(vendor_id: int):
        return jsonify(serialize(vendors.update_vendor(vendor_id, from_json(VendorInput, json_body()))))

    @app.route("/api/vendors/<int:vendor_id>", methods=["DELETE"], endpoint="api_delete_vendor")
    @api_errors("delete vendor")
    def delete_vendor(vendor_id: int):
        vendors.delete_vendor(vendor_id)
        return jsonify({"success": True})
