from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .site_model import Site
from .site_repository import SiteRepository


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id, site_name, is_main FROM sites ORDER BY site_name")
            rows = fetchall(cur)
            return [Site(site_id=int(r["site_id"]), site_name=r["site_name"], is_main=bool(r["is_main"])) for r in rows]
