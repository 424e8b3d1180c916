from __future__ import annotations

from collections import Counter, defaultdict
from typing import Iterable, Sequence

from ...attendance.model import AttendanceRecord
from ...core.enums import AttendanceStatus
from ...workers.model import HourlyRate, SalariedRate, Worker
from ..model import LedgerEntry, SalaryCalculation
from .base import PayrollCalculator


def _sum_by_worker(entries: Iterable[LedgerEntry]) -> dict[int, int]:
    totals: dict[int, int] = defaultdict(int)
    for e in entries:
        totals[e.worker_id] += int(e.amount)
    return totals


class MonthlyPayrollCalculator(PayrollCalculator):
    """Standard monthly rule.

    - day-rate workers: days present x portfolio rate
    - salaried workers: the position's monthly rate, attendance ignored
    - advances and loans are deducted, never below 0
    - while the month is still running the gross figure is reported as final,
      since its ledger entries are not complete yet
    """

    def calculate(
        self,
        workers: Sequence[Worker],
        attendance: Sequence[AttendanceRecord],
        advances: Sequence[LedgerEntry],
        loans: Sequence[LedgerEntry],
        *,
        is_current_month: bool,
    ) -> list[SalaryCalculation]:
        days_by_worker = Counter(r.worker_id for r in attendance if r.status == AttendanceStatus.PRESENT)
        advances_by_worker = _sum_by_worker(advances)
        loans_by_worker = _sum_by_worker(loans)

        out: list[SalaryCalculation] = []
        for worker in workers:
            source = worker.rate_source
            if not isinstance(source, (HourlyRate, SalariedRate)):
                raise TypeError(f"Unsupported rate source: {type(source)!r}")

            rate = int(source.rate or 0)
            if isinstance(source, SalariedRate):
                days_present = 0
                base_salary = rate
            else:
                days_present = days_by_worker.get(worker.worker_id, 0)
                base_salary = days_present * rate

            total_advances = advances_by_worker.get(worker.worker_id, 0)
            total_loans = loans_by_worker.get(worker.worker_id, 0)
            net_salary = max(0, base_salary - total_advances - total_loans)

            out.append(
                SalaryCalculation(
                    worker_id=worker.worker_id,
                    worker_name=worker.name,
                    worker_type=worker.worker_type,
                    site_id=worker.site_id,
                    site_name=worker.site_name or "-",
                    rate=rate,
                    days_present=days_present,
                    base_salary=base_salary,
                    total_advances=total_advances,
                    total_loans=total_loans,
                    final_salary=base_salary if is_current_month else net_salary,
                    is_fixed_rate=isinstance(source, SalariedRate),
                )
            )
        return out
