"""Role checks shared by services and controllers."""

from __future__ import annotations

from .enums import MANAGEMENT_ROLES, Role

ATTENDANCE_ROLES = frozenset(Role)


def is_management(role: Role) -> bool:
    return role in MANAGEMENT_ROLES


def can_mark_attendance(role: Role) -> bool:
    return role in ATTENDANCE_ROLES


def can_manage_workers(role: Role) -> bool:
    return is_management(role)


def can_manage_payroll(role: Role) -> bool:
    return is_management(role)


def can_access_logistics(role: Role) -> bool:
    return is_management(role)
