from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Dashboard roles used for access control."""

    OWNER = "owner"
    HR = "hr"
    PROJECT_MANAGER = "project_manager"
    SUPERVISOR = "supervisor"
    SECRETARY = "secretary"


MANAGEMENT_ROLES = frozenset({Role.OWNER, Role.HR, Role.PROJECT_MANAGER})


class WorkerType(str, Enum):
    """Grounds workers are paid per day present, office workers a fixed monthly rate."""

    GROUNDS = "grounds"
    OFFICE = "office"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"


class GoodsLogType(str, Enum):
    SENT = "sent"
    RECEIVED = "received"


class InvoiceType(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"
