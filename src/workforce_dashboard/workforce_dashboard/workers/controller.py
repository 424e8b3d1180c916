from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user, error_response, optional_int_arg, roles_required
from ..core.enums import MANAGEMENT_ROLES
from ..container import Container
from .service import parse_worker_type, worker_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workers", methods=["GET"], endpoint="list_workers")
    @roles_required(MANAGEMENT_ROLES)
    def list_workers():
        try:
            workers = container.worker_service.list_workers(
                search=request.args.get("search", ""),
                site_id=optional_int_arg(request.args.get("site")),
                worker_type=parse_worker_type(request.args.get("type")),
            )
        except Exception as e:
            return error_response(e, action="loading workers")
        return jsonify({"total": len(workers), "workers": [worker_to_dict(w) for w in workers]})

    @app.route("/api/workers/lookups", methods=["GET"], endpoint="worker_lookups")
    @roles_required(MANAGEMENT_ROLES)
    def worker_lookups():
        return jsonify(container.worker_service.lookups())

    @app.route("/api/workers", methods=["POST"], endpoint="create_worker")
    @roles_required(MANAGEMENT_ROLES)
    def create_worker():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            worker_id = container.worker_service.create_worker(current_role=current_user().role, payload=data)
        except Exception as e:
            return error_response(e, action="adding the worker")
        return jsonify({"success": True, "worker_id": worker_id, "message": "Worker added"}), 201

    @app.route("/api/workers/<int:worker_id>", methods=["PUT", "PATCH"], endpoint="update_worker")
    @roles_required(MANAGEMENT_ROLES)
    def update_worker(worker_id: int):
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            container.worker_service.update_worker(current_role=current_user().role, worker_id=worker_id, payload=data)
        except Exception as e:
            return error_response(e, action="updating the worker")
        return jsonify({"success": True, "message": "Worker updated"})

    @app.route("/api/workers/<int:worker_id>", methods=["DELETE"], endpoint="delete_worker")
    @roles_required(MANAGEMENT_ROLES)
    def delete_worker(worker_id: int):
        try:
            container.worker_service.delete_worker(current_role=current_user().role, worker_id=worker_id)
        except Exception as e:
            return error_response(e, action="deleting the worker")
        return jsonify({"success": True, "message": "Worker deleted"})
