# wmsconsole/services/list_queries.py
"""
列表视图的筛选 / 排序 / 计数（纯函数，不改入参）。

排序字段使用线上字段名（id / createdAt / status / orderId / name / sku / locationCode /
quantityInStock），与列表表头一致。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, Tuple, TypeVar

from wmsconsole.models.enums import OrderStatus, TaskStatus
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.schemas.product import Product
from wmsconsole.services.dashboard_metrics import DEFAULT_LOW_STOCK_THRESHOLD, is_low_stock

SortOrder = Literal["asc", "desc"]
ALL = "ALL"

T = TypeVar("T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _ts(v: Optional[datetime]) -> datetime:
    if v is None:
        return _EPOCH
    return v if v.tzinfo else v.replace(tzinfo=timezone.utc)


def _text(v: Any) -> str:
    return "" if v is None else str(v).lower()


ORDER_SORT_KEYS: Dict[str, Callable[[Order], Any]] = {
    "id": lambda o: o.id,
    "createdAt": lambda o: _ts(o.created_at),
    "status": lambda o: _text(o.status.value),
}

TASK_SORT_KEYS: Dict[str, Callable[[PickingTask], Any]] = {
    "id": lambda t: t.id,
    "orderId": lambda t: t.order_id,
    "status": lambda t: _text(t.status.value),
    "createdAt": lambda t: _ts(t.created_at),
}

PRODUCT_SORT_KEYS: Dict[str, Callable[[Product], Any]] = {
    "name": lambda p: _text(p.name),
    "sku": lambda p: _text(p.sku),
    "locationCode": lambda p: _text(p.location_code),
    "quantityInStock": lambda p: p.quantity_in_stock,
}


def _sorted(rows: List[T], keys: Dict[str, Callable[[T], Any]], sort_by: str, order: SortOrder) -> List[T]:
    try:
        key = keys[sort_by]
    except KeyError:
        raise ValueError(f"unsupported sort field: {sort_by!r}")
    return sorted(rows, key=key, reverse=(order == "desc"))


def toggle_sort(current_by: str, current_order: SortOrder, field: str) -> Tuple[str, SortOrder]:
    """表头点击：同字段翻转顺序，换字段从升序开始。"""
    if field == current_by:
        return field, ("desc" if current_order == "asc" else "asc")
    return field, "asc"


# ---------- orders ----------


def filter_orders(
    orders: Optional[Sequence[Order]],
    *,
    status: str = ALL,
    sort_by: str = "createdAt",
    order: SortOrder = "desc",
) -> List[Order]:
    rows = [o for o in orders or [] if status == ALL or o.status == status]
    return _sorted(rows, ORDER_SORT_KEYS, sort_by, order)


def order_status_counts(orders: Optional[Sequence[Order]]) -> Dict[str, int]:
    rows = list(orders or [])
    counts = {ALL: len(rows)}
    for s in OrderStatus:
        counts[s.value] = sum(1 for o in rows if o.status is s)
    return counts


# ---------- picking tasks ----------


def filter_tasks(
    tasks: Optional[Sequence[PickingTask]],
    *,
    status: str = ALL,
    sort_by: str = "id",
    order: SortOrder = "desc",
) -> List[PickingTask]:
    rows = [t for t in tasks or [] if status == ALL or t.status == status]
    return _sorted(rows, TASK_SORT_KEYS, sort_by, order)


def task_status_counts(tasks: Optional[Sequence[PickingTask]]) -> Dict[str, int]:
    rows = list(tasks or [])
    counts = {ALL: len(rows)}
    for s in TaskStatus:
        counts[s.value] = sum(1 for t in rows if t.status is s)
    return counts


# ---------- products ----------


def filter_products(
    products: Optional[Sequence[Product]],
    *,
    search: str = "",
    low_stock_only: bool = False,
    threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    sort_by: str = "name",
    order: SortOrder = "asc",
) -> List[Product]:
    term = search.lower()

    def _match(p: Product) -> bool:
        hit = term in p.name.lower() or term in p.sku.lower() or term in p.location_code.lower()
        return hit and (not low_stock_only or is_low_stock(p.quantity_in_stock, threshold))

    rows = [p for p in products or [] if _match(p)]
    return _sorted(rows, PRODUCT_SORT_KEYS, sort_by, order)
