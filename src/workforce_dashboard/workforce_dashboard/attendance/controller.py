from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_positive_int
from ..common.web import current_user, error_response, login_required, optional_int_arg
from ..core.exceptions import ValidationError
from ..container import Container
from ..workers.service import parse_worker_type, worker_to_dict
from .service import day_stats, mark_all_present, parse_status, record_to_dict


def register(app: Flask, container: Container) -> None:
    def _selected_date():
        value = request.args.get("date")
        return parse_iso_date(value) if value else now_local().date()

    @app.route("/api/attendance/workers", methods=["GET"], endpoint="attendance_workers")
    @login_required
    def attendance_workers():
        """Roster the signed-in user may mark, optionally pre-filled as all Present."""
        try:
            workers = container.attendance_service.workers_for_marking(
                current_user(),
                search=request.args.get("search", ""),
                site_id=optional_int_arg(request.args.get("site")),
                worker_type=parse_worker_type(request.args.get("type")),
            )
        except Exception as e:
            return error_response(e, action="loading workers")

        payload = {"workers": [worker_to_dict(w) for w in workers]}
        if request.args.get("prefill") == "present":
            payload["marks"] = {str(k): v.value for k, v in mark_all_present(workers).items()}
        return jsonify(payload)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_for_date")
    @login_required
    def attendance_for_date():
        try:
            work_date = _selected_date()
            records = container.attendance_service.records_for_date(
                current_user(),
                work_date=work_date,
                search=request.args.get("search", ""),
                site_id=optional_int_arg(request.args.get("site")),
                worker_type=parse_worker_type(request.args.get("type")),
                status=parse_status(request.args.get("status")),
            )
        except Exception as e:
            return error_response(e, action="loading attendance")

        return jsonify(
            {
                "date": work_date.strftime("%Y-%m-%d"),
                "stats": asdict(day_stats(records)),
                "records": [record_to_dict(r) for r in records],
            }
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        try:
            marks = data.get("marks") or {}
            if not isinstance(marks, dict):
                raise ValidationError("marks must map worker ids to a status")
            work_date = parse_iso_date(data["date"]) if data.get("date") else now_local().date()
            stored = container.attendance_service.mark_attendance(
                current_user(),
                work_date=work_date,
                marks={require_positive_int(k, "Worker"): v for k, v in marks.items()},
            )
        except Exception as e:
            return error_response(e, action="submitting attendance")
        return jsonify({"success": True, "count": stored, "message": f"Attendance marked for {stored} worker(s)"}), 201
