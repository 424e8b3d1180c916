from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LedgerEntry
from .repository import LedgerRepository

_TABLES = {"advances": "salary_advances", "loans": "loans"}


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _list(self, table: str, month: str) -> Sequence[LedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT entry_id, worker_id, amount, month, entry_date, notes
                FROM {table}
                WHERE month=%s
                ORDER BY entry_date, entry_id
                """,
                (month,),
            )
            return [
                LedgerEntry(
                    entry_id=int(r["entry_id"]),
                    worker_id=int(r["worker_id"]),
                    amount=int(r["amount"]),
                    month=r["month"],
                    entry_date=r["entry_date"],
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]

    def _add(self, table: str, *, worker_id: int, amount: int, month: str, entry_date: date, notes: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {table}(worker_id, amount, month, entry_date, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(worker_id), int(amount), month, entry_date, notes),
            )
            return int(cur.lastrowid)

    def list_advances(self, *, month: str) -> Sequence[LedgerEntry]:
        return self._list(_TABLES["advances"], month)

    def list_loans(self, *, month: str) -> Sequence[LedgerEntry]:
        return self._list(_TABLES["loans"], month)

    def add_advance(self, *, worker_id: int, amount: int, month: str, entry_date: date, notes: Optional[str]) -> int:
        return self._add(_TABLES["advances"], worker_id=worker_id, amount=amount, month=month, entry_date=entry_date, notes=notes)

    def add_loan(self, *, worker_id: int, amount: int, month: str, entry_date: date, notes: Optional[str]) -> int:
        return self._add(_TABLES["loans"], worker_id=worker_id, amount=amount, month=month, entry_date=entry_date, notes=notes)
