from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import GoodsLogType, InvoiceType
from .model import GoodsLogEntry, InventoryItem, Invoice, Store


class LogisticsRepository(Protocol):
    def list_stores(self) -> Sequence[Store]:
        raise NotImplementedError

    def list_inventory(self, *, store_id: Optional[int] = None) -> Sequence[InventoryItem]:
        raise NotImplementedError

    def get_item(self, item_id: int) -> Optional[InventoryItem]:
        raise NotImplementedError

    def add_item(self, *, store_id: int, item_name: str, quantity: int) -> int:
        raise NotImplementedError

    def list_goods_log(self, *, limit: int) -> Sequence[GoodsLogEntry]:
        raise NotImplementedError

    def add_goods_log(
        self,
        *,
        item_id: int,
        store_from: Optional[int],
        store_to: int,
        quantity: int,
        log_type: GoodsLogType,
    ) -> int:
        raise NotImplementedError

    def list_invoices(self, *, limit: int) -> Sequence[Invoice]:
        raise NotImplementedError

    def add_invoice(
        self,
        *,
        store_id: int,
        item_id: int,
        amount: int,
        supplier_name: str,
        invoice_type: InvoiceType,
    ) -> int:
        raise NotImplementedError
