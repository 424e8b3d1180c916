from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import WorkerType
from .model import Portfolio, Position, Worker, WorkerInput


class WorkerRepository(Protocol):
    """Worker roster access.

    Implementations return workers with ``rate_source`` already resolved from
    the portfolio (grounds) or position (office) table.
    """

    def list_workers(
        self,
        *,
        site_id: Optional[int] = None,
        worker_type: Optional[WorkerType] = None,
    ) -> Sequence[Worker]:
        raise NotImplementedError

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def create_worker(self, data: WorkerInput) -> int:
        raise NotImplementedError

    def update_worker(self, worker_id: int, data: WorkerInput) -> bool:
        raise NotImplementedError

    def delete_worker(self, worker_id: int) -> bool:
        raise NotImplementedError

    def list_portfolios(self) -> Sequence[Portfolio]:
        raise NotImplementedError

    def list_positions(self) -> Sequence[Position]:
        raise NotImplementedError
