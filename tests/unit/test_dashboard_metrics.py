from datetime import datetime, timezone

from wmsconsole.models.enums import OrderStatus, TaskStatus
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.schemas.product import Product
from wmsconsole.services.dashboard_metrics import (
    compute_metrics,
    is_low_stock,
    low_stock_products,
    recent_orders,
)


def _p(i, qty):
    return Product(id=i, sku=f"SKU{i}", name=f"P{i}", quantity_in_stock=qty)


def _o(i, status, day=None):
    created = datetime(2024, 1, day, tzinfo=timezone.utc) if day else None
    return Order(id=i, status=status, created_at=created)


def test_low_stock_threshold_is_strict():
    assert is_low_stock(9) is True
    assert is_low_stock(10) is False
    assert is_low_stock(0) is True
    assert is_low_stock(4, threshold=5) is True


def test_compute_metrics_counts():
    products = [_p(1, 0), _p(2, 9), _p(3, 10), _p(4, 100)]
    orders = [
        _o(1, OrderStatus.NEW, 1),
        _o(2, OrderStatus.ALLOCATED, 2),
        _o(3, OrderStatus.PICKING, 3),
        _o(4, OrderStatus.COMPLETED, 4),
        _o(5, OrderStatus.CANCELLED, 5),
    ]
    tasks = [
        PickingTask(id=1, order_id=3, status=TaskStatus.IN_PROGRESS),
        PickingTask(id=2, order_id=4, status=TaskStatus.DONE),
    ]

    m = compute_metrics(products, orders, tasks)
    assert m.total_products == 4
    assert m.low_stock == 2
    assert m.active_orders == 3
    assert m.pending_tasks == 1
    assert [o.id for o in m.recent_orders] == [5, 4, 3, 2, 1]
    assert [p.id for p in m.low_stock_products] == [1, 2]


def test_compute_metrics_before_data_arrives():
    m = compute_metrics(None, None, None)
    assert (m.total_products, m.low_stock, m.active_orders, m.pending_tasks) == (0, 0, 0, 0)
    assert m.recent_orders == []


def test_recent_orders_limit_and_missing_dates():
    orders = [_o(i, OrderStatus.NEW, i) for i in range(1, 8)] + [_o(99, OrderStatus.NEW)]
    rows = recent_orders(orders)
    assert [o.id for o in rows] == [7, 6, 5, 4, 3]
    # 没有 created_at 的排在最后
    assert recent_orders(orders, limit=10)[-1].id == 99


def test_recent_orders_mixes_naive_and_aware():
    naive = Order(id=1, status=OrderStatus.NEW, created_at=datetime(2024, 2, 1))
    aware = _o(2, OrderStatus.NEW, 15)
    assert [o.id for o in recent_orders([aware, naive])] == [1, 2]


def test_low_stock_preview_limit():
    products = [_p(i, i) for i in range(1, 9)]
    assert len(low_stock_products(products, limit=5)) == 5
    assert len(low_stock_products(products, threshold=3)) == 2
