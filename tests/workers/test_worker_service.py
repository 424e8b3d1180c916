from __future__ import annotations

from datetime import date

import pytest

from src.workforce_dashboard.workforce_dashboard.core.enums import Role, WorkerType
from src.workforce_dashboard.workforce_dashboard.core.exceptions import AuthorizationError, ValidationError
from src.workforce_dashboard.workforce_dashboard.workers.model import HourlyRate, SalariedRate, resolve_rate_source
from src.workforce_dashboard.workforce_dashboard.workers.service import WorkerService, parse_worker_type, worker_to_dict

from tests.fakes import FakeSiteRepo, FakeWorkerRepo, grounds, office


def _payload(**overrides):
    payload = {
        "name": "Kwesi Appiah",
        "worker_type": "grounds",
        "site_id": "1",
        "portfolio_id": "1",
        "position_id": "1",
        "dob": "1990-04-02",
        "date_of_employment": "2024-01-15",
        "phone_number": "0244000000",
        "national_id": "GHA-123",
        "contact_person": "Efua Appiah",
        "cp_phone": "0244000001",
        "cp_relation": "Sister",
    }
    payload.update(overrides)
    return payload


def _service(workers=()):
    repo = FakeWorkerRepo(workers)
    return WorkerService(repo, FakeSiteRepo()), repo


def test_list_workers_applies_filters():
    svc, _ = _service([grounds(1, "Kofi", site_id=1), grounds(2, "Yaw", site_id=2), office(3, "Ama")])

    assert [w.name for w in svc.list_workers()] == ["Ama", "Kofi", "Yaw"]
    assert [w.name for w in svc.list_workers(worker_type=WorkerType.GROUNDS, site_id=2)] == ["Yaw"]
    assert [w.name for w in svc.list_workers(search="am")] == ["Ama"]


def test_create_grounds_worker_clears_position():
    svc, repo = _service()

    worker_id = svc.create_worker(current_role=Role.OWNER, payload=_payload())

    data = repo.created[0]
    assert worker_id == 1
    assert data.portfolio_id == 1
    assert data.position_id is None
    assert data.dob == date(1990, 4, 2)
    assert repo.get_by_id(worker_id).rate_source == HourlyRate(rate=100)


def test_create_office_worker_clears_portfolio():
    svc, repo = _service()

    worker_id = svc.create_worker(current_role=Role.HR, payload=_payload(worker_type="office"))

    assert repo.created[0].portfolio_id is None
    assert repo.get_by_id(worker_id).rate_source == SalariedRate(rate=3000)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"worker_type": ""}, "Worker type is required"),
        ({"worker_type": "contractor"}, "Invalid worker type"),
        ({"portfolio_id": ""}, "portfolio"),
        ({"worker_type": "office", "position_id": None}, "position"),
        ({"name": "  "}, "Name is required"),
        ({"national_id": ""}, "National ID is required"),
        ({"dob": "02/04/1990"}, "Invalid date"),
    ],
)
def test_create_worker_validation(overrides, message):
    svc, repo = _service()

    with pytest.raises(ValidationError, match=message):
        svc.create_worker(current_role=Role.OWNER, payload=_payload(**overrides))
    assert repo.created == []


def test_only_management_maintains_roster():
    svc, _ = _service([grounds(1, "Kofi")])

    with pytest.raises(AuthorizationError):
        svc.create_worker(current_role=Role.SUPERVISOR, payload=_payload())
    with pytest.raises(AuthorizationError):
        svc.delete_worker(current_role=Role.SECRETARY, worker_id=1)


def test_update_worker_switches_rate_source():
    svc, repo = _service([grounds(1, "Kofi")])

    svc.update_worker(current_role=Role.PROJECT_MANAGER, worker_id=1, payload=_payload(name="Kofi", worker_type="office"))

    assert repo.get_by_id(1).worker_type == WorkerType.OFFICE


def test_update_and_delete_missing_worker():
    svc, _ = _service()

    with pytest.raises(ValidationError, match="Worker not found"):
        svc.update_worker(current_role=Role.OWNER, worker_id=5, payload=_payload())
    with pytest.raises(ValidationError, match="Worker not found"):
        svc.delete_worker(current_role=Role.OWNER, worker_id=5)


def test_delete_worker():
    svc, repo = _service([grounds(1, "Kofi")])

    svc.delete_worker(current_role=Role.OWNER, worker_id=1)

    assert repo.get_by_id(1) is None


def test_lookups_lists_sites():
    svc, _ = _service()

    assert [s["site_name"] for s in svc.lookups()["sites"]] == ["Main Yard", "East Ridge"]


def test_resolve_rate_source_defaults_to_zero():
    assert resolve_rate_source(WorkerType.GROUNDS, portfolio_rate=None, position_rate=500) == HourlyRate(0)
    assert resolve_rate_source(WorkerType.OFFICE, portfolio_rate=80, position_rate=None) == SalariedRate(0)


def test_worker_to_dict_uses_dash_for_missing_site():
    data = worker_to_dict(office(3, "Ama", 2500))

    assert data["site_name"] == "-"
    assert data["worker_type"] == "office"
    assert data["rate"] == 2500


def test_parse_worker_type():
    assert parse_worker_type("all") is None
    assert parse_worker_type("office") == WorkerType.OFFICE
