from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import WorkerType


@dataclass(frozen=True)
class LedgerEntry:
    """A salary advance or loan booked against a worker for one month."""

    entry_id: int
    worker_id: int
    amount: int
    month: str
    entry_date: date
    notes: Optional[str] = None


@dataclass(frozen=True)
class SalaryCalculation:
    """One derived salary row per worker; never persisted."""

    worker_id: int
    worker_name: str
    worker_type: WorkerType
    site_id: Optional[int]
    site_name: str
    rate: int
    days_present: int
    base_salary: int
    total_advances: int
    total_loans: int
    final_salary: int
    is_fixed_rate: bool


@dataclass(frozen=True)
class SalaryTotals:
    total_days: int = 0
    total_salary: int = 0
    total_advances: int = 0
    total_loans: int = 0
    total_workers: int = 0

    @property
    def total_deductions(self) -> int:
        return self.total_advances + self.total_loans


@dataclass(frozen=True)
class SalarySheet:
    """Read-model for the salaries page and its CSV export."""

    month: str
    month_label: str
    is_current_month: bool
    rows: list[SalaryCalculation]
    totals: SalaryTotals
