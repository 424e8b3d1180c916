from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import (
    is_current_month,
    month_bounds,
    month_key,
    month_label,
    parse_iso_date,
    parse_month,
    recent_months,
)
from ..common.validators import optional_text, require_positive_int
from ..core.access import can_manage_payroll
from ..core.constants import DEFAULT_MONTH_OPTIONS
from ..core.enums import Role, WorkerType
from ..core.exceptions import AuthorizationError, ValidationError
from ..workers.repository import WorkerRepository
from ..workers.service import matches_filters
from .calculator.base import PayrollCalculator
from .calculator.monthly_calculator import MonthlyPayrollCalculator
from .export import csv_filename, salaries_to_csv
from .model import SalaryCalculation, SalarySheet
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


def salary_to_dict(c: SalaryCalculation) -> dict:
    return {
        "worker_id": c.worker_id,
        "worker_name": c.worker_name,
        "worker_type": c.worker_type.value,
        "site_name": c.site_name,
        "rate": c.rate,
        "days_present": c.days_present,
        "base_salary": c.base_salary,
        "advances": c.total_advances,
        "loans": c.total_loans,
        "final_salary": c.final_salary,
        "is_fixed": c.is_fixed_rate,
    }


class PayrollService:
    """Use case: monthly salary sheet, advances/loans and CSV export.

    Fetching is done here; the arithmetic lives in the calculator.
    """

    def __init__(
        self,
        workers: WorkerRepository,
        attendance: AttendanceRepository,
        ledger: LedgerRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._workers = workers
        self._attendance = attendance
        self._ledger = ledger
        self._calculator = calculator or MonthlyPayrollCalculator()

    @staticmethod
    def month_options(today: date, *, count: int = DEFAULT_MONTH_OPTIONS) -> list[dict]:
        return [{"value": key, "label": label} for key, label in recent_months(today, count)]

    def build_salary_sheet(
        self,
        *,
        month: str,
        today: date,
        search: str = "",
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
    ) -> SalarySheet:
        start, end = month_bounds(month)
        current = is_current_month(month, today)

        workers = self._workers.list_workers()
        attendance = self._attendance.list_present_between(start_date=start, end_date=end)
        advances = self._ledger.list_advances(month=month)
        loans = self._ledger.list_loans(month=month)

        rows = self._calculator.calculate(workers, attendance, advances, loans, is_current_month=current)
        rows = [
            r
            for r in rows
            if matches_filters(
                name=r.worker_name,
                site_id=r.site_id,
                worker_type=r.worker_type,
                search=search,
                filter_site_id=site_id,
                filter_type=worker_type,
            )
        ]
        totals = self._calculator.summarize(rows, is_current_month=current)

        return SalarySheet(
            month=month,
            month_label=month_label(start),
            is_current_month=current,
            rows=rows,
            totals=totals,
        )

    def export_csv(self, sheet: SalarySheet) -> tuple[str, str]:
        """(filename, csv text) for a salary sheet."""
        return csv_filename(sheet.month), salaries_to_csv(sheet.rows, is_current_month=sheet.is_current_month)

    def add_advance(self, *, current_role: Role, payload: dict[str, Any]) -> int:
        return self._add_entry("advance", current_role=current_role, payload=payload)

    def add_loan(self, *, current_role: Role, payload: dict[str, Any]) -> int:
        return self._add_entry("loan", current_role=current_role, payload=payload)

    def _add_entry(self, kind: str, *, current_role: Role, payload: dict[str, Any]) -> int:
        if not can_manage_payroll(current_role):
            raise AuthorizationError("You do not have permission to record advances or loans")

        if not payload.get("worker_id"):
            raise ValidationError("Please select a worker")
        worker_id = require_positive_int(payload.get("worker_id"), "Worker")
        if self._workers.get_by_id(worker_id) is None:
            raise ValidationError("Worker not found")

        amount = require_positive_int(payload.get("amount"), "Amount")
        month = month_key(parse_month(str(payload.get("month") or "")))
        entry_date = parse_iso_date(str(payload.get("date") or ""))
        notes = optional_text(payload.get("notes"))

        add = self._ledger.add_advance if kind == "advance" else self._ledger.add_loan
        entry_id = add(worker_id=worker_id, amount=amount, month=month, entry_date=entry_date, notes=notes)
        logger.info("Recorded %s entry_id=%s worker_id=%s month=%s amount=%s", kind, entry_id, worker_id, month, amount)
        return entry_id
