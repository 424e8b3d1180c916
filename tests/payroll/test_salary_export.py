from datetime import date, timedelta

from src.workforce_dashboard.workforce_dashboard.payroll.calculator.monthly_calculator import MonthlyPayrollCalculator
from src.workforce_dashboard.workforce_dashboard.payroll.export import csv_filename, salaries_to_csv

from tests.fakes import grounds, ledger, office, present

HEADER = '"Worker Name","Type","Site","Rate/Monthly Salary","Days Present","Base Salary","Advances","Loans","Final Salary"'


def _rows(*, is_current_month):
    days = [present(1, date(2026, 9, 1) + timedelta(days=i)) for i in range(20)]
    return MonthlyPayrollCalculator().calculate(
        [grounds(1, "Kofi", 100), office(2, "Ama", 3000)],
        days,
        [ledger(1, 500), ledger(2, 200)],
        [],
        is_current_month=is_current_month,
    )


def test_csv_for_past_month_uses_net_salary():
    text = salaries_to_csv(_rows(is_current_month=False), is_current_month=False)

    assert text == "\n".join(
        [
            HEADER,
            '"Kofi","grounds","Main Yard","100","20","2000","500","0","1500"',
            '"Ama","office","-","3000","Fixed","3000","200","0","2800"',
        ]
    )


def test_csv_for_current_month_reports_base_salary():
    text = salaries_to_csv(_rows(is_current_month=True), is_current_month=True)

    lines = text.split("\n")
    assert lines[1].endswith('"2000","500","0","2000"')
    assert lines[2].endswith('"3000","200","0","3000"')
    assert not text.endswith("\n")


def test_csv_escapes_quotes_in_names():
    rows = MonthlyPayrollCalculator().calculate([grounds(1, 'Kwame "KK" Mensah', 100)], [], [], [], is_current_month=False)

    text = salaries_to_csv(rows, is_current_month=False)

    assert text.split("\n")[1].startswith('"Kwame ""KK"" Mensah","grounds"')


def test_csv_with_no_rows_is_just_the_header():
    assert salaries_to_csv([], is_current_month=False) == HEADER


def test_csv_filename_uses_month_key():
    assert csv_filename("2026-09") == "salaries_2026-09.csv"
