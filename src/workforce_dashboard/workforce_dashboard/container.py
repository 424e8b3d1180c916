from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LOW_STOCK_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .logistics.mysql_logistics_repository import MySQLLogisticsRepository
from .logistics.service import LogisticsService
from .payroll.mysql_ledger_repository import MySQLLedgerRepository
from .payroll.service import PayrollService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .workers.mysql_site_repository import MySQLSiteRepository
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_service: UserService
    worker_service: WorkerService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    logistics_service: LogisticsService


def build_container(*, db_config: dict, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    sites_repo = MySQLSiteRepository(conn)
    workers_repo = MySQLWorkerRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    ledger_repo = MySQLLedgerRepository(conn)
    logistics_repo = MySQLLogisticsRepository(conn)

    return Container(
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        worker_service=WorkerService(workers_repo, sites_repo),
        attendance_service=AttendanceService(attendance_repo, workers_repo),
        payroll_service=PayrollService(workers_repo, attendance_repo, ledger_repo),
        logistics_service=LogisticsService(logistics_repo, low_stock_threshold=low_stock_threshold),
    )
