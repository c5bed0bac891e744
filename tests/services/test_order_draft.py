# tests/services/test_order_draft.py
import asyncio

import pytest

from wmsconsole.gateway.errors import (
    DraftValidationError,
    EmptyDraftError,
    InsufficientStockError,
    RemoteRejectedError,
)
from wmsconsole.models.enums import OrderStatus
from wmsconsole.schemas.product import Product
from wmsconsole.services.order_draft import OrderComposer, OrderDraftService
from wmsconsole.services.order_draft_types import OrderDraft

pytestmark = pytest.mark.asyncio


def _abc(qty: int = 5) -> Product:
    return Product(id=1, sku="ABC", name="Alpha Bolt", location_code="A-01", quantity_in_stock=qty)


def _wid() -> Product:
    return Product(id=2, sku="WID", name="Blue Widget", location_code="B-02", quantity_in_stock=50)


async def test_add_then_merge_over_stock_is_rejected(gateway, store):
    """远端 ABC 只有 5：先加 3 成功，再加 4（合计 7）被拒，草稿保持不变。"""
    svc = OrderDraftService(gateway)

    draft = await svc.add(OrderDraft(), _abc(), 3)
    assert draft.quantity_of("ABC") == 3
    assert ("GET", "/api/products/ABC/stock/3") in store.calls

    with pytest.raises(InsufficientStockError) as ei:
        await svc.add(draft, _abc(), 4)
    assert ei.value.available == 5
    assert ei.value.requested == 7
    assert ei.value.message == "Insufficient stock. Only 5 available."
    assert ("GET", "/api/products/ABC/stock/7") in store.calls

    assert draft.quantity_of("ABC") == 3
    assert len(draft) == 1


async def test_add_merges_same_sku_and_keeps_order(gateway):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _wid(), 2)
    draft = await svc.add(draft, _abc(), 1)
    draft = await svc.add(draft, _wid(), 3)

    assert [line.product_sku for line in draft] == ["WID", "ABC"]
    assert draft.quantity_of("WID") == 5
    assert draft.total_units == 6


async def test_add_rejects_non_positive_quantity_without_network(gateway, store):
    svc = OrderDraftService(gateway)
    with pytest.raises(DraftValidationError):
        await svc.add(OrderDraft(), _abc(), 0)
    assert store.calls == []


async def test_add_refreshes_stock_snapshot(gateway):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _wid(), 1)
    newer = _wid().model_copy(update={"quantity_in_stock": 40, "name": "Renamed"})
    draft = await svc.add(draft, newer, 1)
    line = draft.get("WID")
    assert line.available_stock == 40
    assert line.product_name == "Blue Widget"


async def test_update_quantity_replaces_not_adds(gateway, store):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _abc(), 2)

    draft = await svc.update_quantity(draft, "ABC", 4)
    assert draft.quantity_of("ABC") == 4
    assert ("GET", "/api/products/ABC/stock/4") in store.calls

    with pytest.raises(InsufficientStockError):
        await svc.update_quantity(draft, "ABC", 6)
    assert draft.quantity_of("ABC") == 4


async def test_update_quantity_zero_is_remove(gateway, store):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _abc(), 2)
    n_calls = len(store.calls)

    emptied = await svc.update_quantity(draft, "ABC", 0)
    assert emptied.is_empty
    assert "ABC" not in emptied
    assert len(store.calls) == n_calls

    assert await svc.update_quantity(draft, "NOPE", 3) is draft


async def test_remove_is_local(gateway, store):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _abc(), 1)
    n_calls = len(store.calls)
    assert svc.remove(draft, "ABC").is_empty
    assert svc.remove(draft, "XYZ") is draft
    assert len(store.calls) == n_calls


async def test_submit_empty_draft_never_hits_network(gateway, store):
    svc = OrderDraftService(gateway)
    with pytest.raises(EmptyDraftError):
        await svc.submit(OrderDraft())
    assert store.calls == []


async def test_submit_creates_order(gateway, store):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _wid(), 2)
    draft = await svc.add(draft, _abc(), 1)

    order = await svc.submit(draft)
    assert order.status is OrderStatus.NEW
    assert [(i.product_sku, i.quantity) for i in order.order_line_items] == [("WID", 2), ("ABC", 1)]
    assert order.id in store.orders


async def test_submit_rejected_by_remote_keeps_draft(gateway, store):
    svc = OrderDraftService(gateway)
    draft = await svc.add(OrderDraft(), _abc(), 5)
    # 检查与提交之间库存被别人拿走
    store.products[1]["quantityInStock"] = 2

    with pytest.raises(RemoteRejectedError) as ei:
        await svc.submit(draft)
    assert ei.value.status_code == 409
    assert "Insufficient stock" in ei.value.message
    assert draft.quantity_of("ABC") == 5


async def test_composer_full_flow(gateway):
    visited = []
    composer = OrderComposer(
        OrderDraftService(gateway), products=[_abc(), _wid()], navigate=visited.append
    )

    composer.search_term = "widget"
    assert [p.sku for p in composer.filtered_products()] == ["WID"]

    with pytest.raises(DraftValidationError):
        await composer.add_selected()

    composer.select(_wid(), 3)
    await composer.add_selected()
    assert composer.selected_product is None
    assert composer.quantity == 1
    assert composer.search_term == ""

    composer.review()
    assert composer.current_step == 2
    composer.back()
    assert composer.current_step == 1
    composer.review()

    order = await composer.submit()
    assert composer.current_step == 3
    assert composer.created_order == order
    assert composer.draft.is_empty
    assert visited == [f"/orders/{order.id}"]


async def test_composer_review_requires_items(gateway):
    composer = OrderComposer(OrderDraftService(gateway))
    with pytest.raises(EmptyDraftError):
        composer.review()
    assert composer.current_step == 1
    assert [s.title for s in composer.steps] == ["Add Products", "Review Order", "Confirmation"]


async def test_composer_failed_add_keeps_selection(gateway):
    composer = OrderComposer(OrderDraftService(gateway))
    composer.select(_abc(), 9)
    with pytest.raises(InsufficientStockError):
        await composer.add_selected()
    assert composer.selected_product is not None
    assert composer.quantity == 9
    assert composer.draft.is_empty


async def test_composer_overlapping_mutations_both_land(gateway, monkeypatch):
    """两个变更的库存校验交错挂起，各自成功后都要落到最终草稿上。"""
    composer = OrderComposer(OrderDraftService(gateway))
    composer.select(_wid(), 1)
    await composer.add_selected()

    real_check = gateway.products.check_stock
    release = asyncio.Event()
    in_flight = []

    async def gated_check(sku, quantity):
        in_flight.append(sku)
        await release.wait()
        return await real_check(sku, quantity)

    monkeypatch.setattr(gateway.products, "check_stock", gated_check)

    async def add_abc():
        composer.select(_abc(), 2)
        return await composer.add_selected()

    update = asyncio.create_task(composer.update_quantity("WID", 4))
    add = asyncio.create_task(add_abc())
    while len(in_flight) < 2:
        await asyncio.sleep(0)
    release.set()
    await asyncio.gather(update, add)

    assert [(line.product_sku, line.quantity) for line in composer.draft] == [("WID", 4), ("ABC", 2)]


async def test_composer_concurrent_adds_of_same_sku_merge(gateway):
    composer = OrderComposer(OrderDraftService(gateway))

    async def add(qty):
        composer.select(_wid(), qty)
        return await composer.add_selected()

    await asyncio.gather(add(1), add(2))
    assert composer.draft.quantity_of("WID") == 3
    assert len(composer.draft) == 1


async def test_composer_update_of_line_removed_meanwhile(gateway):
    composer = OrderComposer(OrderDraftService(gateway))
    composer.select(_wid(), 1)
    await composer.add_selected()

    update = asyncio.create_task(composer.update_quantity("WID", 3))
    await asyncio.sleep(0)
    composer.remove("WID")
    await update
    assert composer.draft.is_empty
