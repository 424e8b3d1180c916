from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Site:
    """Domain entity: a construction site."""

    site_id: int
    site_name: str
    is_main: bool = False
