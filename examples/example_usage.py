"""Example: use the service layer directly (no Flask).

Controllers are thin; the salary rules live in the services and calculator.
"""

import importlib

from config import get_settings_module

from src.workforce_dashboard.workforce_dashboard.common.datetime_utils import month_key, now_local
from src.workforce_dashboard.workforce_dashboard.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    today = now_local().date()
    sheet = container.payroll_service.build_salary_sheet(month=month_key(today), today=today)
    print(f"{sheet.month_label}: {sheet.totals.total_workers} worker(s), total {sheet.totals.total_salary}")
    _, content = container.payroll_service.export_csv(sheet)
    print(content)


if __name__ == "__main__":
    main()
