from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..core.enums import WorkerType


@dataclass(frozen=True)
class HourlyRate:
    """Per-day rate from the worker's portfolio (grounds workers)."""

    rate: int = 0


@dataclass(frozen=True)
class SalariedRate:
    """Fixed monthly rate from the worker's position (office workers)."""

    rate: int = 0


RateSource = Union[HourlyRate, SalariedRate]


@dataclass(frozen=True)
class Portfolio:
    portfolio_id: int
    portfolio_name: str
    ratio: int
    rate: int


@dataclass(frozen=True)
class Position:
    position_id: int
    position_name: str
    rate: int


@dataclass(frozen=True)
class Worker:
    """Domain entity: a worker on the roster, with its pay rate already resolved."""

    worker_id: int
    name: str
    rate_source: RateSource
    site_id: Optional[int] = None
    site_name: Optional[str] = None
    portfolio_id: Optional[int] = None
    position_id: Optional[int] = None
    dob: Optional[date] = None
    date_of_employment: Optional[date] = None
    phone_number: str = ""
    national_id: str = ""
    contact_person: str = ""
    cp_phone: str = ""
    cp_relation: str = ""

    @property
    def worker_type(self) -> WorkerType:
        if isinstance(self.rate_source, SalariedRate):
            return WorkerType.OFFICE
        return WorkerType.GROUNDS

    @property
    def rate(self) -> int:
        return int(self.rate_source.rate or 0)


def resolve_rate_source(
    worker_type: WorkerType,
    *,
    portfolio_rate: Optional[int],
    position_rate: Optional[int],
) -> RateSource:
    """Pick the rate table that applies to the worker type; unset rates become 0."""

    if worker_type == WorkerType.OFFICE:
        return SalariedRate(rate=int(position_rate or 0))
    return HourlyRate(rate=int(portfolio_rate or 0))


@dataclass(frozen=True)
class WorkerInput:
    """Validated payload for creating or updating a worker."""

    name: str
    worker_type: WorkerType
    site_id: Optional[int]
    portfolio_id: Optional[int]
    position_id: Optional[int]
    dob: Optional[date]
    date_of_employment: Optional[date]
    phone_number: str
    national_id: str
    contact_person: str
    cp_phone: str
    cp_relation: str
