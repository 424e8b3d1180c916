from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import current_user, error_response, login_required, optional_int_arg, roles_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import MANAGEMENT_ROLES, Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e, action="signing in")

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["site_id"] = s_user.site_id

        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": s_user.user_id,
                    "full_name": s_user.full_name,
                    "role": s_user.role.value,
                    "site_id": s_user.site_id,
                },
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        user = current_user()
        return jsonify(
            {
                "user_id": user.user_id,
                "full_name": user.full_name,
                "role": user.role.value,
                "site_id": user.site_id,
            }
        )

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @roles_required(MANAGEMENT_ROLES)
    def list_users():
        return jsonify({"users": container.user_service.list_accounts()})

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @roles_required(MANAGEMENT_ROLES)
    def create_user():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            try:
                role = Role(data.get("role", ""))
            except ValueError:
                raise ValidationError("Invalid account role")

            user_id = container.user_service.create_account(
                current_role=current_user().role,
                full_name=data.get("full_name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                role=role,
                site_id=optional_int_arg(data.get("site_id")),
            )
        except Exception as e:
            return error_response(e, action="creating the account")
        return jsonify({"success": True, "user_id": user_id}), 201
