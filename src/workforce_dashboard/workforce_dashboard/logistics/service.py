from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.validators import require_non_empty, require_positive_int, require_whole_number
from ..core.access import can_access_logistics
from ..core.constants import DEFAULT_LOW_STOCK_THRESHOLD
from ..core.enums import GoodsLogType, InvoiceType, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import InventoryItem, Store, StoreSummary
from .repository import LogisticsRepository

logger = logging.getLogger(__name__)

RECENT_LOG_LIMIT = 50


def low_stock(items: Iterable[InventoryItem], *, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[InventoryItem]:
    return [i for i in items if i.quantity < threshold]


def store_summaries(stores: Iterable[Store], items: Iterable[InventoryItem]) -> list[StoreSummary]:
    items = list(items)
    out: list[StoreSummary] = []
    for store in stores:
        store_items = [i for i in items if i.store_id == store.store_id]
        out.append(
            StoreSummary(
                store_id=store.store_id,
                name=store.name,
                location=store.location,
                item_count=len(store_items),
                total_quantity=sum(i.quantity for i in store_items),
            )
        )
    return out


def _parse_choice(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}")


class LogisticsService:
    """Use case: stores, inventory, goods movements and invoices."""

    def __init__(self, repo: LogisticsRepository, *, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD):
        self._repo = repo
        self._threshold = int(low_stock_threshold)

    @staticmethod
    def _require_access(role: Role) -> None:
        if not can_access_logistics(role):
            raise AuthorizationError("You do not have access to logistics")

    def overview(self, *, current_role: Role, store_id: Optional[int] = None, search: str = "") -> dict:
        self._require_access(current_role)

        stores = self._repo.list_stores()
        all_items = self._repo.list_inventory()
        items: Sequence[InventoryItem] = self._repo.list_inventory(store_id=store_id) if store_id else all_items

        needle = (search or "").strip().lower()
        if needle:
            items = [i for i in items if needle in i.item_name.lower()]

        return {
            "stores": store_summaries(stores, all_items),
            "inventory": list(items),
            "low_stock": low_stock(all_items, threshold=self._threshold),
            "goods_log": self._repo.list_goods_log(limit=RECENT_LOG_LIMIT),
            "invoices": self._repo.list_invoices(limit=RECENT_LOG_LIMIT),
        }

    def _require_store(self, store_id: Any, field_name: str = "Store") -> int:
        store_id = require_positive_int(store_id, field_name)
        if store_id not in {s.store_id for s in self._repo.list_stores()}:
            raise ValidationError(f"{field_name} not found")
        return store_id

    def _require_item(self, item_id: Any) -> InventoryItem:
        item = self._repo.get_item(require_positive_int(item_id, "Item"))
        if item is None:
            raise ValidationError("Item not found")
        return item

    def add_item(self, *, current_role: Role, payload: Mapping[str, Any]) -> int:
        self._require_access(current_role)
        store_id = self._require_store(payload.get("store_id"))
        item_name = require_non_empty(payload.get("item_name", ""), "Item name")
        quantity = require_whole_number(payload.get("quantity"), "Quantity")
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")

        item_id = self._repo.add_item(store_id=store_id, item_name=item_name, quantity=quantity)
        logger.info("Added inventory item_id=%s to store_id=%s", item_id, store_id)
        return item_id

    def log_goods(self, *, current_role: Role, payload: Mapping[str, Any]) -> int:
        self._require_access(current_role)
        log_type = _parse_choice(GoodsLogType, payload.get("type", GoodsLogType.SENT.value), "movement type")
        item = self._require_item(payload.get("item_id"))
        quantity = require_positive_int(payload.get("quantity"), "Quantity")
        store_to = self._require_store(payload.get("store_to"), "Destination store")

        store_from: Optional[int] = None
        if log_type == GoodsLogType.SENT:
            store_from = self._require_store(payload.get("store_from"), "Source store")
            if store_from == store_to:
                raise ValidationError("Source and destination store must differ")

        log_id = self._repo.add_goods_log(
            item_id=item.item_id,
            store_from=store_from,
            store_to=store_to,
            quantity=quantity,
            log_type=log_type,
        )
        logger.info("Logged %s of item_id=%s qty=%s", log_type.value, item.item_id, quantity)
        return log_id

    def record_invoice(self, *, current_role: Role, payload: Mapping[str, Any]) -> int:
        self._require_access(current_role)
        invoice_type = _parse_choice(InvoiceType, payload.get("type", InvoiceType.PURCHASE.value), "invoice type")
        store_id = self._require_store(payload.get("store_id"))
        item = self._require_item(payload.get("item_id"))
        amount = require_positive_int(payload.get("amount"), "Amount")
        supplier_name = require_non_empty(payload.get("supplier_name", ""), "Supplier name")

        return self._repo.add_invoice(
            store_id=store_id,
            item_id=item.item_id,
            amount=amount,
            supplier_name=supplier_name,
            invoice_type=invoice_type,
        )
