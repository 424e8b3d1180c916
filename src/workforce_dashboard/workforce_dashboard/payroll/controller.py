from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key, now_local
from ..common.web import current_user, error_response, optional_int_arg, roles_required
from ..core.constants import DEFAULT_CURRENCY_SYMBOL
from ..core.enums import MANAGEMENT_ROLES
from ..container import Container
from ..workers.service import parse_worker_type
from .service import salary_to_dict


def register(app: Flask, container: Container) -> None:
    def _build_sheet():
        today = now_local().date()
        return container.payroll_service.build_salary_sheet(
            month=request.args.get("month") or month_key(today),
            today=today,
            search=request.args.get("search", ""),
            site_id=optional_int_arg(request.args.get("site")),
            worker_type=parse_worker_type(request.args.get("type")),
        )

    @app.route("/api/salaries", methods=["GET"], endpoint="salaries")
    @roles_required(MANAGEMENT_ROLES)
    def salaries():
        try:
            sheet = _build_sheet()
        except Exception as e:
            return error_response(e, action="calculating salaries")

        totals = asdict(sheet.totals)
        totals["total_deductions"] = sheet.totals.total_deductions
        return jsonify(
            {
                "month": sheet.month,
                "month_label": sheet.month_label,
                "is_current_month": sheet.is_current_month,
                "month_options": container.payroll_service.month_options(now_local().date()),
                "currency": app.config.get("CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
                "totals": totals,
                "rows": [salary_to_dict(r) for r in sheet.rows],
            }
        )

    @app.route("/api/salaries.csv", methods=["GET"], endpoint="salaries_csv")
    @roles_required(MANAGEMENT_ROLES)
    def salaries_csv():
        try:
            sheet = _build_sheet()
            filename, content = container.payroll_service.export_csv(sheet)
        except Exception as e:
            return error_response(e, action="exporting salaries")

        return app.response_class(
            content.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/salaries/advances", methods=["POST"], endpoint="add_advance")
    @roles_required(MANAGEMENT_ROLES)
    def add_advance():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            entry_id = container.payroll_service.add_advance(current_role=current_user().role, payload=data)
        except Exception as e:
            return error_response(e, action="adding the salary advance")
        return jsonify({"success": True, "entry_id": entry_id, "message": "Salary advance added successfully"}), 201

    @app.route("/api/salaries/loans", methods=["POST"], endpoint="add_loan")
    @roles_required(MANAGEMENT_ROLES)
    def add_loan():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            entry_id = container.payroll_service.add_loan(current_role=current_user().role, payload=data)
        except Exception as e:
            return error_response(e, action="adding the loan")
        return jsonify({"success": True, "entry_id": entry_id, "message": "Loan added successfully"}), 201
