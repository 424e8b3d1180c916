from __future__ import annotations

from datetime import date, datetime

import pytest

from src.workforce_dashboard.workforce_dashboard.core.enums import Role
from src.workforce_dashboard.workforce_dashboard.users.service import SessionUser


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 9, 30, 0)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def owner() -> SessionUser:
    return SessionUser(user_id=1, full_name="Olivia Owner", role=Role.OWNER, site_id=None)


@pytest.fixture
def supervisor() -> SessionUser:
    return SessionUser(user_id=3, full_name="Sam Supervisor", role=Role.SUPERVISOR, site_id=1)


@pytest.fixture
def secretary() -> SessionUser:
    return SessionUser(user_id=4, full_name="Sara Secretary", role=Role.SECRETARY, site_id=None)
