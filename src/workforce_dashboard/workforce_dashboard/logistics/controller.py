from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import current_user, error_response, optional_int_arg, roles_required
from ..core.enums import MANAGEMENT_ROLES
from ..container import Container


def _jsonable(obj) -> dict:
    out = asdict(obj)
    for key, value in out.items():
        if hasattr(value, "isoformat"):
            out[key] = value.isoformat()
        elif hasattr(value, "value"):
            out[key] = value.value
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logistics", methods=["GET"], endpoint="logistics")
    @roles_required(MANAGEMENT_ROLES)
    def logistics():
        try:
            data = container.logistics_service.overview(
                current_role=current_user().role,
                store_id=optional_int_arg(request.args.get("store")),
                search=request.args.get("search", ""),
            )
        except Exception as e:
            return error_response(e, action="loading logistics")
        return jsonify({key: [_jsonable(x) for x in rows] for key, rows in data.items()})

    @app.route("/api/logistics/inventory", methods=["POST"], endpoint="add_inventory")
    @roles_required(MANAGEMENT_ROLES)
    def add_inventory():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            item_id = container.logistics_service.add_item(current_role=current_user().role, payload=data)
        except Exception as e:
            return error_response(e, action="adding inventory")
        return jsonify({"success": True, "item_id": item_id, "message": "Inventory item added successfully"}), 201

    @app.route("/api/logistics/goods-log", methods=["POST"], endpoint="add_goods_log")
    @roles_required(MANAGEMENT_ROLES)
    def add_goods_log():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            log_id = container.logistics_service.log_goods(current_role=current_user().role, payload=data)
        except Exception as e:
            return error_response(e, action="logging goods")
        return jsonify({"success": True, "log_id": log_id, "message": "Goods log added successfully"}), 201

    @app.route("/api/logistics/invoices", methods=["POST"], endpoint="add_invoice")
    @roles_required(MANAGEMENT_ROLES)
    def add_invoice():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            invoice_id = container.logistics_service.record_invoice(current_role=current_user().role, payload=data)
        except Exception as e:
            return error_response(e, action="adding the invoice")
        return jsonify({"success": True, "invoice_id": invoice_id, "message": "Invoice added successfully"}), 201
