# wmsconsole/services/dashboard_metrics.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from wmsconsole.models.enums import TaskStatus
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.schemas.product import Product
from wmsconsole.services.order_status import is_active

DEFAULT_LOW_STOCK_THRESHOLD = 10

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class DashboardMetrics:
    """
    看板指标（每次渲染重算，不缓存）：

    - total_products  : 商品总数
    - low_stock       : quantity_in_stock < 阈值 的商品数
    - active_orders   : NEW / ALLOCATED / PICKING 订单数
    - pending_tasks   : IN_PROGRESS 拣货任务数
    - recent_orders   : 按 created_at 倒序的最近 N 单
    """

    total_products: int
    low_stock: int
    active_orders: int
    pending_tasks: int
    recent_orders: List[Order] = field(default_factory=list)
    low_stock_products: List[Product] = field(default_factory=list)


def is_low_stock(quantity: int, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
    return quantity < threshold


def _created_key(order: Order) -> datetime:
    ts = order.created_at
    if ts is None:
        return _EPOCH
    if ts.tzinfo is None:
        # 假定远端给的是 UTC naive
        return ts.replace(tzinfo=timezone.utc)
    return ts


def recent_orders(orders: Optional[Sequence[Order]], limit: int = 5) -> List[Order]:
    return sorted(orders or [], key=_created_key, reverse=True)[:limit]


def low_stock_products(
    products: Optional[Sequence[Product]],
    *,
    threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    limit: Optional[int] = None,
) -> List[Product]:
    rows = [p for p in products or [] if is_low_stock(p.quantity_in_stock, threshold)]
    return rows if limit is None else rows[:limit]


def compute_metrics(
    products: Optional[Sequence[Product]],
    orders: Optional[Sequence[Order]],
    tasks: Optional[Sequence[PickingTask]],
    *,
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    recent_limit: int = 5,
    low_stock_preview: int = 5,
) -> DashboardMetrics:
    products = products or []
    orders = orders or []
    tasks = tasks or []
    return DashboardMetrics(
        total_products=len(products),
        low_stock=len(low_stock_products(products, threshold=low_stock_threshold)),
        active_orders=sum(1 for o in orders if is_active(o.status)),
        pending_tasks=sum(1 for t in tasks if t.status is TaskStatus.IN_PROGRESS),
        recent_orders=recent_orders(orders, recent_limit),
        low_stock_products=low_stock_products(
            products, threshold=low_stock_threshold, limit=low_stock_preview
        ),
    )
