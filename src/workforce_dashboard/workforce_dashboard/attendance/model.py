from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, WorkerType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's attendance for one day."""

    attendance_id: int
    worker_id: int
    work_date: date
    status: AttendanceStatus
    site_id: Optional[int] = None
    worker_type: Optional[WorkerType] = None
    marked_by: Optional[int] = None
    worker_name: Optional[str] = None
    site_name: Optional[str] = None


@dataclass(frozen=True)
class NewAttendance:
    """Row to insert when a supervisor/secretary submits a day's marks."""

    worker_id: int
    site_id: Optional[int]
    work_date: date
    status: AttendanceStatus
    marked_by: int
    worker_type: WorkerType


@dataclass(frozen=True)
class DayStats:
    present: int = 0
    absent: int = 0
    leave: int = 0
    total: int = 0
