from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.access import is_management
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role
    site_id: Optional[int]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for user_id=%s", user.user_id)
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            role=user.role,
            site_id=user.site_id,
        )


class UserService:
    """Use case: manage dashboard accounts (management only)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        password: str,
        role: Role,
        site_id: Optional[int] = None,
    ) -> int:
        if not is_management(current_role):
            raise AuthorizationError("You do not have permission to create accounts")
        if role == Role.OWNER and current_role != Role.OWNER:
            raise AuthorizationError("Only an owner can create another owner account")

        full_name = require_non_empty(full_name, "Full name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if role == Role.SUPERVISOR and not site_id:
            raise ValidationError("Supervisors must be assigned to a site")

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            site_id=int(site_id) if site_id else None,
        )
        logger.info("Created %s account user_id=%s", role.value, user_id)
        return user_id

    def list_accounts(self):
        return [
            {
                "user_id": u.user_id,
                "full_name": u.full_name,
                "email": u.email,
                "role": u.role.value,
                "site_id": u.site_id,
                "is_active": u.is_active,
            }
            for u in self._users.list_all()
        ]
