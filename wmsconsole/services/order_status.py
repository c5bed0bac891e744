# wmsconsole/services/order_status.py
"""
订单状态机（纯函数，表驱动）

  NEW → ALLOCATED → PICKING → COMPLETED
  NEW / ALLOCATED → CANCELLED（唯一由客户端发起的跃迁）

除 cancel 外的所有跃迁都由远端驱动，本地只通过 refetch 观察，从不本地断言。
每个派生视图都是 status 的穷举映射：新增状态值会在 assert_never 处被类型检查器拦下。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Tuple, assert_never

from wmsconsole.models.enums import OrderStatus

StepState = Literal["done", "current", "pending", "cancelled"]

ORDER_FLOW: Tuple[OrderStatus, ...] = (
    OrderStatus.NEW,
    OrderStatus.ALLOCATED,
    OrderStatus.PICKING,
    OrderStatus.COMPLETED,
)

CANCELLABLE = frozenset({OrderStatus.NEW, OrderStatus.ALLOCATED})
ACTIVE = frozenset({OrderStatus.NEW, OrderStatus.ALLOCATED, OrderStatus.PICKING})


@dataclass(frozen=True)
class TimelineStep:
    """
    - status  : 流程节点
    - state   : done / current / pending / cancelled
    - reached : 节点是否已到达（done 或 current）
    """

    status: OrderStatus
    state: StepState

    @property
    def reached(self) -> bool:
        return self.state in ("done", "current")


@dataclass(frozen=True)
class OrderTimeline:
    steps: List[TimelineStep]
    progress_percent: float
    is_cancelled: bool


@dataclass(frozen=True)
class OrderActions:
    can_cancel: bool
    show_pick_progress: bool
    show_picking_tasks_link: bool


def flow_index(status: OrderStatus) -> int:
    """status 在 ORDER_FLOW 中的下标；CANCELLED 不在主流程上，返回 -1。"""
    match status:
        case OrderStatus.NEW:
            return 0
        case OrderStatus.ALLOCATED:
            return 1
        case OrderStatus.PICKING:
            return 2
        case OrderStatus.COMPLETED:
            return 3
        case OrderStatus.CANCELLED:
            return -1
        case _ as unreachable:
            assert_never(unreachable)


def can_cancel(status: OrderStatus) -> bool:
    return status in CANCELLABLE


def is_active(status: OrderStatus) -> bool:
    return status in ACTIVE


def show_pick_progress(status: OrderStatus) -> bool:
    match status:
        case OrderStatus.PICKING | OrderStatus.COMPLETED:
            return True
        case OrderStatus.NEW | OrderStatus.ALLOCATED | OrderStatus.CANCELLED:
            return False
        case _ as unreachable:
            assert_never(unreachable)


def timeline(status: OrderStatus) -> OrderTimeline:
    status = OrderStatus(status)

    if status is OrderStatus.CANCELLED:
        # 已取消：只保留第 0 步，其余全部标成 cancelled，进度不渲染
        steps = [
            TimelineStep(s, "done" if i == 0 else "cancelled") for i, s in enumerate(ORDER_FLOW)
        ]
        return OrderTimeline(steps=steps, progress_percent=0.0, is_cancelled=True)

    current = flow_index(status)
    steps: List[TimelineStep] = []
    for i, s in enumerate(ORDER_FLOW):
        if i < current:
            state: StepState = "done"
        elif i == current:
            state = "current"
        else:
            state = "pending"
        steps.append(TimelineStep(s, state))

    progress = current / (len(ORDER_FLOW) - 1) * 100
    return OrderTimeline(steps=steps, progress_percent=progress, is_cancelled=False)


def order_actions(status: OrderStatus) -> OrderActions:
    status = OrderStatus(status)
    return OrderActions(
        can_cancel=can_cancel(status),
        show_pick_progress=show_pick_progress(status),
        show_picking_tasks_link=status is OrderStatus.PICKING,
    )
