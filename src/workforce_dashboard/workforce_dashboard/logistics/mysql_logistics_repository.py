from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import GoodsLogType, InvoiceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, optional_int
from .model import GoodsLogEntry, InventoryItem, Invoice, Store
from .repository import LogisticsRepository

_ITEM_SELECT = """
    SELECT i.item_id, i.store_id, i.item_name, i.quantity, i.last_updated, s.name AS store_name
    FROM inventory i
    JOIN stores s ON s.store_id = i.store_id
"""


def _to_item(r) -> InventoryItem:
    return InventoryItem(
        item_id=int(r["item_id"]),
        store_id=int(r["store_id"]),
        item_name=r["item_name"],
        quantity=int(r["quantity"]),
        last_updated=r.get("last_updated"),
        store_name=r.get("store_name"),
    )


class MySQLLogisticsRepository(LogisticsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_stores(self) -> Sequence[Store]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_id, name, location FROM stores ORDER BY name")
            return [Store(store_id=int(r["store_id"]), name=r["name"], location=r["location"]) for r in fetchall(cur)]

    def list_inventory(self, *, store_id: Optional[int] = None) -> Sequence[InventoryItem]:
        clauses: list[str] = []
        params: list[object] = []
        if store_id is not None:
            clauses.append("i.store_id=%s")
            params.append(int(store_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_ITEM_SELECT} {build_where(clauses)} ORDER BY i.item_name", tuple(params))
            return [_to_item(r) for r in fetchall(cur)]

    def get_item(self, item_id: int) -> Optional[InventoryItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_ITEM_SELECT} WHERE i.item_id=%s", (int(item_id),))
            row = fetchone(cur)
            return _to_item(row) if row else None

    def add_item(self, *, store_id: int, item_name: str, quantity: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO inventory(store_id, item_name, quantity) VALUES(%s,%s,%s)",
                (int(store_id), item_name, int(quantity)),
            )
            return int(cur.lastrowid)

    def list_goods_log(self, *, limit: int) -> Sequence[GoodsLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    g.log_id, g.item_id, g.store_from, g.store_to, g.quantity, g.type, g.logged_at,
                    i.item_name, sf.name AS store_from_name, st.name AS store_to_name
                FROM goods_log g
                JOIN inventory i ON i.item_id = g.item_id
                LEFT JOIN stores sf ON sf.store_id = g.store_from
                LEFT JOIN stores st ON st.store_id = g.store_to
                ORDER BY g.logged_at DESC, g.log_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                GoodsLogEntry(
                    log_id=int(r["log_id"]),
                    item_id=int(r["item_id"]),
                    store_from=optional_int(r.get("store_from")),
                    store_to=optional_int(r.get("store_to")),
                    quantity=int(r["quantity"]),
                    type=GoodsLogType(r["type"]),
                    logged_at=r.get("logged_at"),
                    item_name=r.get("item_name"),
                    store_from_name=r.get("store_from_name"),
                    store_to_name=r.get("store_to_name"),
                )
                for r in fetchall(cur)
            ]

    def add_goods_log(
        self,
        *,
        item_id: int,
        store_from: Optional[int],
        store_to: int,
        quantity: int,
        log_type: GoodsLogType,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO goods_log(item_id, store_from, store_to, quantity, type)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(item_id), store_from, int(store_to), int(quantity), log_type.value),
            )
            return int(cur.lastrowid)

    def list_invoices(self, *, limit: int) -> Sequence[Invoice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    v.invoice_id, v.store_id, v.item_id, v.amount, v.supplier_name, v.type, v.issued_at,
                    s.name AS store_name, i.item_name
                FROM invoices v
                JOIN stores s ON s.store_id = v.store_id
                JOIN inventory i ON i.item_id = v.item_id
                ORDER BY v.issued_at DESC, v.invoice_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                Invoice(
                    invoice_id=int(r["invoice_id"]),
                    store_id=int(r["store_id"]),
                    item_id=int(r["item_id"]),
                    amount=int(r["amount"]),
                    supplier_name=r["supplier_name"],
                    type=InvoiceType(r["type"]),
                    issued_at=r.get("issued_at"),
                    store_name=r.get("store_name"),
                    item_name=r.get("item_name"),
                )
                for r in fetchall(cur)
            ]

    def add_invoice(
        self,
        *,
        store_id: int,
        item_id: int,
        amount: int,
        supplier_name: str,
        invoice_type: InvoiceType,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO invoices(store_id, item_id, amount, supplier_name, type)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(store_id), int(item_id), int(amount), supplier_name, invoice_type.value),
            )
            return int(cur.lastrowid)
