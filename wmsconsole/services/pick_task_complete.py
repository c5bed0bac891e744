# wmsconsole/services/pick_task_complete.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from wmsconsole.gateway import RemoteGateway
from wmsconsole.gateway.errors import IllegalTransitionError
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.services.pick_task_status import can_complete

logger = logging.getLogger("wmsconsole.pick_task_complete")

Confirm = Callable[[str], bool]


class PickTaskCompleteService:
    def __init__(self, gateway: RemoteGateway) -> None:
        self.gateway = gateway

    async def complete(
        self,
        task: PickingTask,
        *,
        confirm: Optional[Confirm] = None,
    ) -> Optional[PickingTask]:
        """IN_PROGRESS → DONE；确认被拒返回 None。"""
        if not can_complete(task.status):
            raise IllegalTransitionError("Task", task.id, task.status.value, "complete")

        if confirm is not None and not confirm(f"Are you sure you want to complete Task #{task.id}?"):
            return None

        updated = await self.gateway.picking_tasks.complete(task.id)
        logger.info("task #%s: complete %s -> %s", task.id, task.status.value, updated.status.value)
        return updated
