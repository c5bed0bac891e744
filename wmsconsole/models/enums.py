# wmsconsole/models/enums.py
from __future__ import annotations

from enum import StrEnum


class OrderStatus(StrEnum):
    """
    订单状态（远端拥有，本地只读；唯一的客户端跃迁是 cancel）：

    - NEW        新建，尚未分配库存
    - ALLOCATED  已分配（远端分配算法驱动）
    - PICKING    拣货中（远端已生成拣货任务）
    - COMPLETED  已完成（终态）
    - CANCELLED  已取消（终态，仅可从 NEW / ALLOCATED 发起）
    """

    NEW = "NEW"
    ALLOCATED = "ALLOCATED"
    PICKING = "PICKING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class TaskStatus(StrEnum):
    """
    拣货任务状态：IN_PROGRESS → DONE（单向，DONE 为终态）。
    """

    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @property
    def is_terminal(self) -> bool:
        return self is TaskStatus.DONE
