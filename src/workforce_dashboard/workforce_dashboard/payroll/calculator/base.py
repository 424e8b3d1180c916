from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...workers.model import Worker
from ..model import LedgerEntry, SalaryCalculation, SalaryTotals


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        workers: Sequence[Worker],
        attendance: Sequence[AttendanceRecord],
        advances: Sequence[LedgerEntry],
        loans: Sequence[LedgerEntry],
        *,
        is_current_month: bool,
    ) -> list[SalaryCalculation]:
        raise NotImplementedError

    def summarize(self, rows: Sequence[SalaryCalculation], *, is_current_month: bool) -> SalaryTotals:
        """Totals for the summary cards. Days only count for day-rate workers."""

        total_days = 0
        total_salary = 0
        total_advances = 0
        total_loans = 0
        for row in rows:
            if not row.is_fixed_rate:
                total_days += row.days_present
            total_salary += row.base_salary if is_current_month else row.final_salary
            total_advances += row.total_advances
            total_loans += row.total_loans

        return SalaryTotals(
            total_days=total_days,
            total_salary=total_salary,
            total_advances=total_advances,
            total_loans=total_loans,
            total_workers=len(rows),
        )
