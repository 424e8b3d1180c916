"""Flask helpers shared by the feature controllers."""

from __future__ import annotations

from functools import wraps
from typing import Any, Iterable, Optional

from flask import current_app, jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, ValidationError
from ..users.service import SessionUser


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    return SessionUser(
        user_id=int(session["user_id"]),
        full_name=session.get("name", ""),
        role=Role(session["role"]),
        site_id=session.get("site_id"),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(roles: Iterable[Role]):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if session.get("role") not in allowed:
                return jsonify({"success": False, "message": "You do not have access to this page"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def error_response(exc: Exception, *, action: str):
    """Translate a service exception into a JSON error response."""

    if isinstance(exc, ValidationError):
        return jsonify({"success": False, "message": str(exc)}), 400
    if isinstance(exc, AuthenticationError):
        return jsonify({"success": False, "message": str(exc)}), 401
    if isinstance(exc, AuthorizationError):
        return jsonify({"success": False, "message": str(exc)}), 403
    if isinstance(exc, DomainError):
        return jsonify({"success": False, "message": str(exc)}), 400

    current_app.logger.exception("Unexpected error while %s", action)
    if current_app.config.get("DEBUG"):
        return jsonify({"success": False, "message": f"System error while {action}: {exc}"}), 500
    return jsonify({"success": False, "message": f"System error while {action}"}), 500


def optional_int_arg(value: Any) -> Optional[int]:
    """Query-string ids: '', 'all' and missing mean no filter."""
    if value is None or value in ("", "all"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid id: {value!r}")
