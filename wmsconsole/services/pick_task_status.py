# wmsconsole/services/pick_task_status.py
"""
拣货任务状态机：IN_PROGRESS → DONE（单向，客户端只能触发前进）。

行级拣货状态是派生的，不落库：任务 DONE 则其关联订单的每一行都是 Picked，
否则都是 Pending（数据模型不跟踪部分拣货）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, assert_never

from wmsconsole.models.enums import TaskStatus
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask

PickState = Literal["Picked", "Pending"]


@dataclass(frozen=True)
class PickLine:
    product_sku: str
    quantity: int
    pick_state: PickState


@dataclass(frozen=True)
class TaskTimeline:
    """created → completed 两步；进行中 50%，完成 100%。"""

    created_reached: bool
    completed_reached: bool
    progress_percent: float


@dataclass(frozen=True)
class TaskActions:
    can_complete: bool
    show_completed_badge: bool


def can_complete(status: TaskStatus) -> bool:
    return status is TaskStatus.IN_PROGRESS


def line_pick_state(status: TaskStatus) -> PickState:
    match status:
        case TaskStatus.DONE:
            return "Picked"
        case TaskStatus.IN_PROGRESS:
            return "Pending"
        case _ as unreachable:
            assert_never(unreachable)


def task_timeline(status: TaskStatus) -> TaskTimeline:
    match status:
        case TaskStatus.DONE:
            return TaskTimeline(created_reached=True, completed_reached=True, progress_percent=100.0)
        case TaskStatus.IN_PROGRESS:
            return TaskTimeline(created_reached=True, completed_reached=False, progress_percent=50.0)
        case _ as unreachable:
            assert_never(unreachable)


def task_actions(status: TaskStatus) -> TaskActions:
    status = TaskStatus(status)
    return TaskActions(
        can_complete=can_complete(status),
        show_completed_badge=status is TaskStatus.DONE,
    )


def pick_lines(task: PickingTask, order: Optional[Order]) -> List[PickLine]:
    """任务关联订单的每一行 + 由任务状态继承而来的拣货状态。订单未加载时返回空。"""
    if order is None:
        return []
    state = line_pick_state(task.status)
    return [
        PickLine(product_sku=item.product_sku, quantity=item.quantity, pick_state=state)
        for item in order.order_line_items
    ]
