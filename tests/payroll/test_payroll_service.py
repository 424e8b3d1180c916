from __future__ import annotations

from datetime import date

import pytest

from src.workforce_dashboard.workforce_dashboard.core.enums import Role, WorkerType
from src.workforce_dashboard.workforce_dashboard.core.exceptions import AuthorizationError, ValidationError
from src.workforce_dashboard.workforce_dashboard.payroll.service import PayrollService, salary_to_dict

from tests.fakes import FakeAttendanceRepo, FakeLedgerRepo, FakeWorkerRepo, grounds, ledger, office, present


def _service(*, workers=None, records=(), advances=(), loans=()):
    workers_repo = FakeWorkerRepo(
        workers
        if workers is not None
        else [
            grounds(1, "Kofi Boateng", 100, site_id=1, site_name="Main Yard"),
            grounds(2, "Yaw Mensah", 120, site_id=2, site_name="East Ridge"),
            office(3, "Ama Owusu", 3000),
        ]
    )
    attendance_repo = FakeAttendanceRepo(records)
    ledger_repo = FakeLedgerRepo(advances, loans)
    return PayrollService(workers_repo, attendance_repo, ledger_repo), attendance_repo, ledger_repo


def test_sheet_uses_calendar_month_bounds(today):
    svc, attendance_repo, ledger_repo = _service()

    svc.build_salary_sheet(month="2026-02", today=today)

    assert attendance_repo.last_range == (date(2026, 2, 1), date(2026, 2, 28))
    assert ledger_repo.months_requested == ["2026-02"]


def test_sheet_ignores_attendance_and_ledger_outside_the_month(today):
    svc, _, _ = _service(
        records=[
            present(1, date(2026, 9, 1)),
            present(1, date(2026, 9, 30)),
            present(1, date(2026, 10, 1)),
            present(1, date(2026, 8, 31)),
        ],
        advances=[ledger(1, 50, "2026-09"), ledger(1, 70, "2026-08")],
    )

    sheet = svc.build_salary_sheet(month="2026-09", today=today)

    kofi = next(r for r in sheet.rows if r.worker_id == 1)
    assert kofi.days_present == 2
    assert kofi.total_advances == 50
    assert kofi.final_salary == 150
    assert sheet.is_current_month is False
    assert sheet.month_label == "September 2026"


def test_current_month_sheet_reports_gross(today):
    svc, _, _ = _service(
        records=[present(1, date(2026, 10, 1)), present(1, date(2026, 10, 2))],
        advances=[ledger(1, 150, "2026-10")],
    )

    sheet = svc.build_salary_sheet(month="2026-10", today=today)

    kofi = next(r for r in sheet.rows if r.worker_id == 1)
    assert sheet.is_current_month is True
    assert kofi.final_salary == 200
    assert sheet.totals.total_salary == 200 + 3000


def test_filters_apply_before_totals(today):
    svc, _, _ = _service(records=[present(1, date(2026, 9, 3)), present(2, date(2026, 9, 3))])

    sheet = svc.build_salary_sheet(month="2026-09", today=today, worker_type=WorkerType.GROUNDS, site_id=2)

    assert [r.worker_name for r in sheet.rows] == ["Yaw Mensah"]
    assert sheet.totals.total_workers == 1
    assert sheet.totals.total_salary == 120


def test_search_is_case_insensitive(today):
    svc, _, _ = _service()

    sheet = svc.build_salary_sheet(month="2026-09", today=today, search="  owusu ")

    assert [r.worker_id for r in sheet.rows] == [3]


def test_invalid_month_is_rejected(today):
    svc, _, _ = _service()

    with pytest.raises(ValidationError):
        svc.build_salary_sheet(month="09/2026", today=today)


def test_export_returns_filename_and_text(today):
    svc, _, _ = _service(workers=[office(3, "Ama Owusu", 3000)])

    sheet = svc.build_salary_sheet(month="2026-09", today=today)
    filename, text = svc.export_csv(sheet)

    assert filename == "salaries_2026-09.csv"
    assert text.split("\n")[1] == '"Ama Owusu","office","-","3000","Fixed","3000","0","0","3000"'


def test_month_options_cover_last_twelve_months(today):
    options = PayrollService.month_options(today)

    assert len(options) == 12
    assert options[0] == {"value": "2026-10", "label": "October 2026"}
    assert options[-1] == {"value": "2025-11", "label": "November 2025"}


def test_salary_to_dict_shape(today):
    svc, _, _ = _service(workers=[grounds(1, "Kofi Boateng", 100)])

    row = svc.build_salary_sheet(month="2026-09", today=today).rows[0]

    assert salary_to_dict(row)["worker_type"] == "grounds"
    assert salary_to_dict(row)["is_fixed"] is False


def test_add_advance_records_entry():
    svc, _, ledger_repo = _service()

    entry_id = svc.add_advance(
        current_role=Role.HR,
        payload={"worker_id": "1", "amount": "250", "month": "2026-09", "date": "2026-09-12", "notes": "  "},
    )

    assert entry_id == 1
    entry = ledger_repo.advances[0]
    assert entry.worker_id == 1
    assert entry.amount == 250
    assert entry.month == "2026-09"
    assert entry.entry_date == date(2026, 9, 12)
    assert entry.notes is None


def test_add_loan_keeps_notes():
    svc, _, ledger_repo = _service()

    svc.add_loan(
        current_role=Role.OWNER,
        payload={"worker_id": 3, "amount": 1000, "month": "2026-09", "date": "2026-09-01", "notes": "Rent"},
    )

    assert ledger_repo.loans[0].notes == "Rent"
    assert ledger_repo.advances == []


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"amount": 10, "month": "2026-09", "date": "2026-09-01"}, "Please select a worker"),
        ({"worker_id": 99, "amount": 10, "month": "2026-09", "date": "2026-09-01"}, "Worker not found"),
        ({"worker_id": 1, "amount": 0, "month": "2026-09", "date": "2026-09-01"}, "Amount must be at least 1"),
        ({"worker_id": 1, "amount": "abc", "month": "2026-09", "date": "2026-09-01"}, "Amount must be a whole number"),
        ({"worker_id": 1, "amount": 2.7, "month": "2026-09", "date": "2026-09-01"}, "Amount must be a whole number"),
        ({"worker_id": 1, "amount": True, "month": "2026-09", "date": "2026-09-01"}, "Amount must be a whole number"),
        ({"worker_id": 1, "amount": 10, "month": "Sept", "date": "2026-09-01"}, "Invalid month"),
        ({"worker_id": 1, "amount": 10, "month": "2026-09", "date": "01/09/2026"}, "Invalid date"),
    ],
)
def test_add_advance_validation(payload, message):
    svc, _, ledger_repo = _service()

    with pytest.raises(ValidationError, match=message):
        svc.add_advance(current_role=Role.HR, payload=payload)
    assert ledger_repo.advances == []


def test_only_management_records_ledger_entries():
    svc, _, _ = _service()

    with pytest.raises(AuthorizationError):
        svc.add_loan(
            current_role=Role.SUPERVISOR,
            payload={"worker_id": 1, "amount": 10, "month": "2026-09", "date": "2026-09-01"},
        )


def test_integral_float_amount_is_accepted():
    svc, _, ledger_repo = _service()

    svc.add_advance(
        current_role=Role.HR,
        payload={"worker_id": 1, "amount": 300.0, "month": "2026-09", "date": "2026-09-12"},
    )

    assert ledger_repo.advances[0].amount == 300
