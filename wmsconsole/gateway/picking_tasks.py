# wmsconsole/gateway/picking_tasks.py
from __future__ import annotations

from typing import List

from wmsconsole.gateway.client import RemoteClient, parse_many, parse_one
from wmsconsole.models.enums import TaskStatus
from wmsconsole.schemas.picking_task import PickingTask


class PickingTasksApi:
    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    async def _list(self, path: str) -> List[PickingTask]:
        rows = await self.client.get(path)
        return parse_many(PickingTask, rows)

    async def list_all(self) -> List[PickingTask]:
        return await self._list("/api/picking-tasks")

    async def get(self, task_id: int) -> PickingTask:
        return parse_one(PickingTask, await self.client.get(f"/api/picking-tasks/{int(task_id)}"))

    async def list_by_status(self, status: TaskStatus) -> List[PickingTask]:
        return await self._list(f"/api/picking-tasks/status/{TaskStatus(status).value}")

    async def list_in_progress(self) -> List[PickingTask]:
        return await self._list("/api/picking-tasks/in-progress")

    async def list_completed(self) -> List[PickingTask]:
        return await self._list("/api/picking-tasks/completed")

    async def complete(self, task_id: int) -> PickingTask:
        body = await self.client.put(f"/api/picking-tasks/{int(task_id)}/complete")
        return parse_one(PickingTask, body)
