from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from .model import SalaryCalculation

CSV_HEADERS = (
    "Worker Name",
    "Type",
    "Site",
    "Rate/Monthly Salary",
    "Days Present",
    "Base Salary",
    "Advances",
    "Loans",
    "Final Salary",
)


def _csv_line(cells: Sequence[str]) -> str:
    out = io.StringIO()
    csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="").writerow(cells)
    return out.getvalue()


def salary_row_cells(calc: SalaryCalculation, *, is_current_month: bool) -> list[str]:
    return [
        calc.worker_name,
        calc.worker_type.value,
        calc.site_name,
        str(calc.rate),
        "Fixed" if calc.is_fixed_rate else str(calc.days_present),
        str(calc.base_salary),
        str(calc.total_advances),
        str(calc.total_loans),
        str(calc.base_salary if is_current_month else calc.final_salary),
    ]


def salaries_to_csv(rows: Iterable[SalaryCalculation], *, is_current_month: bool) -> str:
    """Every cell quoted, rows joined with a bare newline."""

    lines = [_csv_line(CSV_HEADERS)]
    lines.extend(_csv_line(salary_row_cells(c, is_current_month=is_current_month)) for c in rows)
    return "\n".join(lines)


def csv_filename(month: str) -> str:
    return f"salaries_{month}.csv"
