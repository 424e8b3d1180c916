from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus, WorkerType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, optional_int
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        worker_id=int(r["worker_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        site_id=optional_int(r.get("site_id")),
        worker_type=WorkerType(r["worker_type"]) if r.get("worker_type") else None,
        marked_by=optional_int(r.get("marked_by")),
        worker_name=r.get("worker_name"),
        site_name=r.get("site_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(
        self,
        *,
        work_date: date,
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["a.work_date=%s"]
        params: list[object] = [work_date]

        if site_id is not None:
            clauses.append("a.site_id=%s")
            params.append(int(site_id))
        if worker_type is not None:
            clauses.append("a.worker_type=%s")
            params.append(worker_type.value)
        if status is not None:
            clauses.append("a.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attendance_id, a.worker_id, a.work_date, a.status, a.site_id,
                    a.worker_type, a.marked_by,
                    w.name AS worker_name, s.site_name
                FROM attendance a
                JOIN workers w ON w.worker_id = a.worker_id
                LEFT JOIN sites s ON s.site_id = a.site_id
                WHERE {where}
                ORDER BY w.name ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_present_between(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, worker_id, work_date, status, site_id, worker_type, marked_by
                FROM attendance
                WHERE work_date BETWEEN %s AND %s AND status=%s
                """,
                (start_date, end_date, AttendanceStatus.PRESENT.value),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def marked_worker_ids(self, *, work_date: date, worker_ids: Iterable[int]) -> set[int]:
        ids = [int(i) for i in worker_ids]
        if not ids:
            return set()
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT worker_id FROM attendance WHERE work_date=%s AND worker_id IN ({placeholders})",
                (work_date, *ids),
            )
            return {int(r["worker_id"]) for r in fetchall(cur)}

    def create_many(self, rows: Sequence[NewAttendance]) -> int:
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(worker_id, site_id, work_date, status, marked_by, worker_type)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                [
                    (r.worker_id, r.site_id, r.work_date, r.status.value, r.marked_by, r.worker_type.value)
                    for r in rows
                ],
            )
            return len(rows)
