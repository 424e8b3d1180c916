from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import WorkerType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, optional_int
from .model import Portfolio, Position, Worker, WorkerInput, resolve_rate_source
from .repository import WorkerRepository

_SELECT = """
    SELECT
        w.worker_id, w.name, w.worker_type, w.site_id, w.portfolio_id, w.position_id,
        w.dob, w.date_of_employment, w.phone_number, w.national_id,
        w.contact_person, w.cp_phone, w.cp_relation,
        s.site_name,
        p.rate AS portfolio_rate,
        ps.rate AS position_rate
    FROM workers w
    LEFT JOIN sites s ON s.site_id = w.site_id
    LEFT JOIN portfolios p ON p.portfolio_id = w.portfolio_id
    LEFT JOIN positions ps ON ps.position_id = w.position_id
"""


def _to_worker(row: Dict[str, Any]) -> Worker:
    worker_type = WorkerType(row["worker_type"])
    return Worker(
        worker_id=int(row["worker_id"]),
        name=row["name"],
        rate_source=resolve_rate_source(
            worker_type,
            portfolio_rate=row.get("portfolio_rate"),
            position_rate=row.get("position_rate"),
        ),
        site_id=optional_int(row.get("site_id")),
        site_name=row.get("site_name"),
        portfolio_id=optional_int(row.get("portfolio_id")),
        position_id=optional_int(row.get("position_id")),
        dob=row.get("dob"),
        date_of_employment=row.get("date_of_employment"),
        phone_number=row.get("phone_number") or "",
        national_id=row.get("national_id") or "",
        contact_person=row.get("contact_person") or "",
        cp_phone=row.get("cp_phone") or "",
        cp_relation=row.get("cp_relation") or "",
    )


def _params(data: WorkerInput) -> tuple:
    return (
        data.name,
        data.dob,
        data.worker_type.value,
        data.site_id,
        data.portfolio_id,
        data.position_id,
        data.date_of_employment,
        data.phone_number,
        data.national_id,
        data.contact_person,
        data.cp_phone,
        data.cp_relation,
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_workers(
        self,
        *,
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
    ) -> Sequence[Worker]:
        clauses: list[str] = []
        params: list[object] = []
        if site_id is not None:
            clauses.append("w.site_id=%s")
            params.append(int(site_id))
        if worker_type is not None:
            clauses.append("w.worker_type=%s")
            params.append(worker_type.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {build_where(clauses)} ORDER BY w.name", tuple(params))
            return [_to_worker(r) for r in fetchall(cur)]

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE w.worker_id=%s", (int(worker_id),))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def create_worker(self, data: WorkerInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workers(
                    name, dob, worker_type, site_id, portfolio_id, position_id,
                    date_of_employment, phone_number, national_id,
                    contact_person, cp_phone, cp_relation
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(data),
            )
            return int(cur.lastrowid)

    def update_worker(self, worker_id: int, data: WorkerInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE workers
                SET name=%s, dob=%s, worker_type=%s, site_id=%s, portfolio_id=%s, position_id=%s,
                    date_of_employment=%s, phone_number=%s, national_id=%s,
                    contact_person=%s, cp_phone=%s, cp_relation=%s
                WHERE worker_id=%s
                """,
                _params(data) + (int(worker_id),),
            )
            return cur.rowcount > 0

    def delete_worker(self, worker_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (int(worker_id),))
            return cur.rowcount > 0

    def list_portfolios(self) -> Sequence[Portfolio]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT portfolio_id, portfolio_name, ratio, rate FROM portfolios ORDER BY portfolio_name")
            return [
                Portfolio(
                    portfolio_id=int(r["portfolio_id"]),
                    portfolio_name=r["portfolio_name"],
                    ratio=int(r["ratio"]),
                    rate=int(r["rate"]),
                )
                for r in fetchall(cur)
            ]

    def list_positions(self) -> Sequence[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT position_id, position_name, rate FROM positions ORDER BY position_name")
            return [
                Position(position_id=int(r["position_id"]), position_name=r["position_name"], rate=int(r["rate"]))
                for r in fetchall(cur)
            ]
