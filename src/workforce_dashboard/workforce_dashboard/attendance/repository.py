from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, WorkerType
from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def list_for_date(
        self,
        *,
        work_date: date,
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_present_between(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Present rows with ``start_date <= work_date <= end_date``."""

        raise NotImplementedError

    def marked_worker_ids(self, *, work_date: date, worker_ids: Iterable[int]) -> set[int]:
        raise NotImplementedError

    def create_many(self, rows: Sequence[NewAttendance]) -> int:
        raise NotImplementedError
