from __future__ import annotations

from typing import Protocol, Sequence

from .site_model import Site


class SiteRepository(Protocol):
    def list_all(self) -> Sequence[Site]:
        raise NotImplementedError
