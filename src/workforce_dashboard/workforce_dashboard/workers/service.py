from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.access import can_manage_workers
from ..core.enums import Role, WorkerType
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Worker, WorkerInput
from .repository import WorkerRepository
from .site_repository import SiteRepository

logger = logging.getLogger(__name__)


def matches_filters(
    *,
    name: str,
    site_id: Optional[int],
    worker_type: WorkerType,
    search: str = "",
    filter_site_id: Optional[int] = None,
    filter_type: Optional[WorkerType] = None,
) -> bool:
    """Roster filter shared by the workers, attendance and salaries views."""

    if search and search.strip().lower() not in (name or "").lower():
        return False
    if filter_site_id is not None and site_id != filter_site_id:
        return False
    if filter_type is not None and worker_type != filter_type:
        return False
    return True


def parse_worker_type(value: Optional[str]) -> Optional[WorkerType]:
    if value is None or value in ("", "all"):
        return None
    try:
        return WorkerType(value)
    except ValueError:
        raise ValidationError("Invalid worker type")


def worker_to_dict(w: Worker) -> dict:
    return {
        "worker_id": w.worker_id,
        "name": w.name,
        "worker_type": w.worker_type.value,
        "site_id": w.site_id,
        "site_name": w.site_name or "-",
        "portfolio_id": w.portfolio_id,
        "position_id": w.position_id,
        "rate": w.rate,
        "dob": w.dob.strftime("%Y-%m-%d") if w.dob else None,
        "date_of_employment": w.date_of_employment.strftime("%Y-%m-%d") if w.date_of_employment else None,
        "phone_number": w.phone_number,
        "national_id": w.national_id,
        "contact_person": w.contact_person,
        "cp_phone": w.cp_phone,
        "cp_relation": w.cp_relation,
    }


def _optional_id(value: Any) -> Optional[int]:
    if value in (None, "", "none"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid id: {value!r}")


def _optional_date(value: Any):
    if not value:
        return None
    return parse_iso_date(str(value))


class WorkerService:
    """Use case: browse and maintain the worker roster."""

    def __init__(self, workers: WorkerRepository, sites: SiteRepository):
        self._workers = workers
        self._sites = sites

    def list_workers(
        self,
        *,
        search: str = "",
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
    ) -> list[Worker]:
        return filter_workers(self._workers.list_workers(), search=search, site_id=site_id, worker_type=worker_type)

    def lookups(self) -> dict:
        return {
            "sites": [{"site_id": s.site_id, "site_name": s.site_name} for s in self._sites.list_all()],
            "portfolios": [
                {"portfolio_id": p.portfolio_id, "portfolio_name": p.portfolio_name, "rate": p.rate}
                for p in self._workers.list_portfolios()
            ],
            "positions": [
                {"position_id": p.position_id, "position_name": p.position_name, "rate": p.rate}
                for p in self._workers.list_positions()
            ],
        }

    def build_input(self, payload: Mapping[str, Any]) -> WorkerInput:
        worker_type = parse_worker_type(payload.get("worker_type"))
        if worker_type is None:
            raise ValidationError("Worker type is required")

        portfolio_id = _optional_id(payload.get("portfolio_id"))
        position_id = _optional_id(payload.get("position_id"))
        if worker_type == WorkerType.GROUNDS:
            if portfolio_id is None:
                raise ValidationError("Grounds workers need a portfolio")
            position_id = None
        else:
            if position_id is None:
                raise ValidationError("Office workers need a position")
            portfolio_id = None

        return WorkerInput(
            name=require_non_empty(payload.get("name", ""), "Name"),
            worker_type=worker_type,
            site_id=_optional_id(payload.get("site_id")),
            portfolio_id=portfolio_id,
            position_id=position_id,
            dob=_optional_date(payload.get("dob")),
            date_of_employment=_optional_date(payload.get("date_of_employment")),
            phone_number=require_non_empty(payload.get("phone_number", ""), "Phone number"),
            national_id=require_non_empty(payload.get("national_id", ""), "National ID"),
            contact_person=require_non_empty(payload.get("contact_person", ""), "Contact person"),
            cp_phone=require_non_empty(payload.get("cp_phone", ""), "Contact person phone"),
            cp_relation=require_non_empty(payload.get("cp_relation", ""), "Contact person relation"),
        )

    def create_worker(self, *, current_role: Role, payload: Mapping[str, Any]) -> int:
        self._require_manager(current_role)
        worker_id = self._workers.create_worker(self.build_input(payload))
        logger.info("Created worker worker_id=%s", worker_id)
        return worker_id

    def update_worker(self, *, current_role: Role, worker_id: int, payload: Mapping[str, Any]) -> None:
        self._require_manager(current_role)
        if not self._workers.get_by_id(worker_id):
            raise ValidationError("Worker not found")
        if not self._workers.update_worker(worker_id, self.build_input(payload)):
            raise ValidationError("Updating worker failed")

    def delete_worker(self, *, current_role: Role, worker_id: int) -> None:
        self._require_manager(current_role)
        if not self._workers.get_by_id(worker_id):
            raise ValidationError("Worker not found")
        if not self._workers.delete_worker(worker_id):
            raise ValidationError("Deleting worker failed")
        logger.info("Deleted worker worker_id=%s", worker_id)

    @staticmethod
    def _require_manager(role: Role) -> None:
        if not can_manage_workers(role):
            raise AuthorizationError("You do not have permission to manage workers")


def filter_workers(
    workers: Iterable[Worker],
    *,
    search: str = "",
    site_id: Optional[int] = None,
    worker_type: Optional[WorkerType] = None,
) -> list[Worker]:
    return [
        w
        for w in workers
        if matches_filters(
            name=w.name,
            site_id=w.site_id,
            worker_type=w.worker_type,
            search=search,
            filter_site_id=site_id,
            filter_type=worker_type,
        )
    ]
