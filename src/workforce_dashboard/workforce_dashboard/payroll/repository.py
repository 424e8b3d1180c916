from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LedgerEntry


class LedgerRepository(Protocol):
    """Salary advances and loans, both keyed by month (YYYY-MM)."""

    def list_advances(self, *, month: str) -> Sequence[LedgerEntry]:
        raise NotImplementedError

    def list_loans(self, *, month: str) -> Sequence[LedgerEntry]:
        raise NotImplementedError

    def add_advance(self, *, worker_id: int, amount: int, month: str, entry_date: date, notes: Optional[str]) -> int:
        raise NotImplementedError

    def add_loan(self, *, worker_id: int, amount: int, month: str, entry_date: date, notes: Optional[str]) -> int:
        raise NotImplementedError
