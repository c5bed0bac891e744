# wmsconsole/schemas/picking_task.py
from __future__ import annotations

from datetime import datetime

from wmsconsole.models.enums import TaskStatus
from wmsconsole.schemas._base import _Base


class PickingTask(_Base):
    """
    拣货任务（远端在订单进入 ALLOCATED / PICKING 时自动生成）。
    order_id 只是弱引用：用于查询订单，不拥有订单。
    """

    id: int
    order_id: int
    status: TaskStatus
    created_at: datetime | None = None
