from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.access import can_mark_attendance, is_management
from ..core.enums import AttendanceStatus, Role, WorkerType
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.service import SessionUser
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from ..workers.service import filter_workers
from .model import AttendanceRecord, DayStats, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_status(value: Optional[str]) -> Optional[AttendanceStatus]:
    if value is None or value in ("", "all"):
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value!r}")


def day_stats(records: Iterable[AttendanceRecord]) -> DayStats:
    counts = {s: 0 for s in AttendanceStatus}
    total = 0
    for r in records:
        counts[r.status] += 1
        total += 1
    return DayStats(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        leave=counts[AttendanceStatus.LEAVE],
        total=total,
    )


def mark_all_present(workers: Iterable[Worker]) -> dict[int, AttendanceStatus]:
    return {w.worker_id: AttendanceStatus.PRESENT for w in workers}


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "worker_id": r.worker_id,
        "worker_name": r.worker_name or "-",
        "site_name": r.site_name or "-",
        "date": r.work_date.strftime("%Y-%m-%d"),
        "status": r.status.value,
        "worker_type": r.worker_type.value if r.worker_type else None,
    }


class AttendanceService:
    """Use case: daily attendance marking and day views.

    Supervisors only see grounds workers of their own site; secretaries only
    office workers; management roles see everyone.
    """

    def __init__(self, attendance: AttendanceRepository, workers: WorkerRepository):
        self._attendance = attendance
        self._workers = workers

    @staticmethod
    def _scope(user: SessionUser) -> tuple[Optional[int], Optional[WorkerType]]:
        if user.role == Role.SUPERVISOR:
            if not user.site_id:
                raise AuthorizationError("Your account is not assigned to a site")
            return int(user.site_id), WorkerType.GROUNDS
        if user.role == Role.SECRETARY:
            return None, WorkerType.OFFICE
        return None, None

    def workers_for_marking(
        self,
        user: SessionUser,
        *,
        search: str = "",
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
    ) -> list[Worker]:
        if not can_mark_attendance(user.role):
            raise AuthorizationError("You do not have permission to mark attendance")

        scope_site, scope_type = self._scope(user)
        roster = self._workers.list_workers(site_id=scope_site, worker_type=scope_type)
        if not is_management(user.role):
            site_id, worker_type = None, None
        return filter_workers(roster, search=search, site_id=site_id, worker_type=worker_type)

    def mark_attendance(
        self,
        user: SessionUser,
        *,
        work_date: date,
        marks: Mapping[int, AttendanceStatus | str],
    ) -> int:
        if not marks:
            raise ValidationError("Please mark attendance for at least one worker")

        allowed = {w.worker_id: w for w in self.workers_for_marking(user)}

        rows: list[NewAttendance] = []
        for worker_id, raw_status in marks.items():
            worker_id = int(worker_id)
            status = parse_status(raw_status.value if isinstance(raw_status, AttendanceStatus) else raw_status)
            if status is None:
                raise ValidationError("Attendance status is required")

            worker = allowed.get(worker_id)
            if worker is None:
                if self._workers.get_by_id(worker_id) is None:
                    raise ValidationError(f"Worker {worker_id} not found")
                raise AuthorizationError(f"You cannot mark attendance for worker {worker_id}")

            rows.append(
                NewAttendance(
                    worker_id=worker_id,
                    site_id=worker.site_id,
                    work_date=work_date,
                    status=status,
                    marked_by=user.user_id,
                    worker_type=worker.worker_type,
                )
            )

        already = self._attendance.marked_worker_ids(work_date=work_date, worker_ids=[r.worker_id for r in rows])
        if already:
            names = ", ".join(sorted(allowed[i].name for i in already))
            raise ValidationError(f"Attendance already marked for {work_date:%Y-%m-%d}: {names}")

        stored = self._attendance.create_many(rows)
        logger.info("user_id=%s marked attendance for %s worker(s) on %s", user.user_id, stored, work_date)
        return stored

    def records_for_date(
        self,
        user: SessionUser,
        *,
        work_date: date,
        search: str = "",
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        if not can_mark_attendance(user.role):
            raise AuthorizationError("You do not have permission to view attendance")

        # the day view is scoped by site for supervisors (all worker types on
        # that site) and by type for secretaries
        scope_site, scope_type = self._scope(user)
        if user.role == Role.SUPERVISOR:
            site_id = scope_site
        elif user.role == Role.SECRETARY:
            worker_type = scope_type

        records = self._attendance.list_for_date(
            work_date=work_date,
            site_id=site_id,
            worker_type=worker_type,
            status=status,
        )
        needle = (search or "").strip().lower()
        if needle:
            records = [r for r in records if needle in (r.worker_name or "").lower()]
        return list(records)
