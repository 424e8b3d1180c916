from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import GoodsLogType, InvoiceType


@dataclass(frozen=True)
class Store:
    store_id: int
    name: str
    location: str


@dataclass(frozen=True)
class InventoryItem:
    item_id: int
    store_id: int
    item_name: str
    quantity: int
    last_updated: Optional[datetime] = None
    store_name: Optional[str] = None


@dataclass(frozen=True)
class GoodsLogEntry:
    """A recorded movement of goods; it does not change stock levels by itself."""

    log_id: int
    item_id: int
    store_from: Optional[int]
    store_to: Optional[int]
    quantity: int
    type: GoodsLogType
    logged_at: Optional[datetime] = None
    item_name: Optional[str] = None
    store_from_name: Optional[str] = None
    store_to_name: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    invoice_id: int
    store_id: int
    item_id: int
    amount: int
    supplier_name: str
    type: InvoiceType
    issued_at: Optional[datetime] = None
    store_name: Optional[str] = None
    item_name: Optional[str] = None


@dataclass(frozen=True)
class StoreSummary:
    store_id: int
    name: str
    location: str
    item_count: int
    total_quantity: int
