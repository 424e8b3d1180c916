from __future__ import annotations

import pytest

from src.workforce_dashboard.workforce_dashboard.core.enums import GoodsLogType, InvoiceType, Role
from src.workforce_dashboard.workforce_dashboard.core.exceptions import AuthorizationError, ValidationError
from src.workforce_dashboard.workforce_dashboard.logistics.model import InventoryItem
from src.workforce_dashboard.workforce_dashboard.logistics.service import (
    RECENT_LOG_LIMIT,
    LogisticsService,
    low_stock,
    store_summaries,
)

from tests.fakes import FakeLogisticsRepo, default_stores


def _items():
    return [
        InventoryItem(item_id=1, store_id=1, item_name="Cement bags", quantity=40),
        InventoryItem(item_id=2, store_id=1, item_name="Rebar", quantity=9),
        InventoryItem(item_id=3, store_id=2, item_name="Gravel", quantity=10),
    ]


def _service(**kwargs):
    repo = FakeLogisticsRepo(default_stores(), _items())
    return LogisticsService(repo, **kwargs), repo


def test_low_stock_is_strictly_below_threshold():
    assert [i.item_id for i in low_stock(_items())] == [2]
    assert [i.item_id for i in low_stock(_items(), threshold=41)] == [1, 2, 3]


def test_store_summaries_count_items_and_quantity():
    summaries = store_summaries(default_stores(), _items())

    assert [(s.item_count, s.total_quantity) for s in summaries] == [(2, 49), (1, 10)]


def test_overview_filters_inventory_but_not_low_stock():
    svc, repo = _service()

    data = svc.overview(current_role=Role.OWNER, store_id=2)

    assert [i.item_id for i in data["inventory"]] == [3]
    assert [i.item_id for i in data["low_stock"]] == [2]
    assert len(data["stores"]) == 2
    assert repo.limits == [RECENT_LOG_LIMIT]


def test_overview_search():
    svc, _ = _service()

    data = svc.overview(current_role=Role.HR, search="REBAR")

    assert [i.item_name for i in data["inventory"]] == ["Rebar"]


def test_configured_threshold_is_used():
    svc, _ = _service(low_stock_threshold=50)

    assert len(svc.overview(current_role=Role.OWNER)["low_stock"]) == 3


def test_logistics_is_management_only():
    svc, _ = _service()

    with pytest.raises(AuthorizationError):
        svc.overview(current_role=Role.SUPERVISOR)


def test_add_item():
    svc, repo = _service()

    item_id = svc.add_item(current_role=Role.OWNER, payload={"store_id": "2", "item_name": " Sand ", "quantity": "0"})

    assert repo.get_item(item_id).item_name == "Sand"
    assert repo.get_item(item_id).quantity == 0


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"store_id": 9, "item_name": "Sand", "quantity": 1}, "Store not found"),
        ({"store_id": 1, "item_name": "", "quantity": 1}, "Item name is required"),
        ({"store_id": 1, "item_name": "Sand", "quantity": -1}, "cannot be negative"),
        ({"store_id": 1, "item_name": "Sand", "quantity": "lots"}, "whole number"),
        ({"store_id": 1, "item_name": "Sand", "quantity": 2.5}, "whole number"),
        ({"store_id": 1, "item_name": 123, "quantity": 1}, "Item name must be text"),
    ],
)
def test_add_item_validation(payload, message):
    svc, _ = _service()

    with pytest.raises(ValidationError, match=message):
        svc.add_item(current_role=Role.OWNER, payload=payload)


def test_sent_goods_need_distinct_source_and_destination():
    svc, repo = _service()

    log_id = svc.log_goods(
        current_role=Role.OWNER,
        payload={"type": "sent", "item_id": 1, "quantity": 5, "store_from": 1, "store_to": 2},
    )

    entry = repo.goods_log[0]
    assert log_id == 1
    assert (entry.store_from, entry.store_to, entry.type) == (1, 2, GoodsLogType.SENT)
    with pytest.raises(ValidationError, match="must differ"):
        svc.log_goods(
            current_role=Role.OWNER,
            payload={"type": "sent", "item_id": 1, "quantity": 5, "store_from": 1, "store_to": 1},
        )
    with pytest.raises(ValidationError, match="Source store"):
        svc.log_goods(current_role=Role.OWNER, payload={"type": "sent", "item_id": 1, "quantity": 5, "store_to": 2})


def test_received_goods_ignore_source_store():
    svc, repo = _service()

    svc.log_goods(
        current_role=Role.OWNER,
        payload={"type": "received", "item_id": 2, "quantity": 3, "store_from": 2, "store_to": 1},
    )

    assert repo.goods_log[0].store_from is None
    assert repo.goods_log[0].store_to == 1


def test_logging_goods_does_not_touch_inventory():
    svc, repo = _service()

    svc.log_goods(
        current_role=Role.OWNER,
        payload={"type": "sent", "item_id": 1, "quantity": 5, "store_from": 1, "store_to": 2},
    )

    assert repo.get_item(1).quantity == 40


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"type": "lost", "item_id": 1, "quantity": 1, "store_to": 1}, "Invalid movement type"),
        ({"type": "received", "item_id": 99, "quantity": 1, "store_to": 1}, "Item not found"),
        ({"type": "received", "item_id": 1, "quantity": 0, "store_to": 1}, "Quantity must be at least 1"),
        ({"type": "received", "item_id": 1, "quantity": 1}, "Destination store"),
    ],
)
def test_log_goods_validation(payload, message):
    svc, repo = _service()

    with pytest.raises(ValidationError, match=message):
        svc.log_goods(current_role=Role.OWNER, payload=payload)
    assert repo.goods_log == []


def test_record_invoice():
    svc, repo = _service()

    invoice_id = svc.record_invoice(
        current_role=Role.PROJECT_MANAGER,
        payload={"type": "sale", "store_id": 1, "item_id": 1, "amount": "1200", "supplier_name": "BuildCo"},
    )

    invoice = repo.invoices[0]
    assert invoice_id == 1
    assert invoice.type == InvoiceType.SALE
    assert invoice.amount == 1200


def test_record_invoice_requires_supplier_and_amount():
    svc, _ = _service()

    with pytest.raises(ValidationError, match="Amount"):
        svc.record_invoice(
            current_role=Role.OWNER,
            payload={"store_id": 1, "item_id": 1, "amount": -5, "supplier_name": "BuildCo"},
        )
    with pytest.raises(ValidationError, match="Supplier name"):
        svc.record_invoice(current_role=Role.OWNER, payload={"store_id": 1, "item_id": 1, "amount": 5})
