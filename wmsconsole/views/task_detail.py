# wmsconsole/views/task_detail.py
from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence

from wmsconsole.core.config import ConsoleSettings, get_settings
from wmsconsole.gateway import RemoteGateway
from wmsconsole.gateway.errors import NotFoundError
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.services.pick_task_complete import Confirm, PickTaskCompleteService
from wmsconsole.services.pick_task_status import (
    PickLine,
    TaskActions,
    TaskTimeline,
    pick_lines,
    task_actions,
    task_timeline,
)
from wmsconsole.services.remote_state import RemoteState, invalidate

TASKS_PATH = "/picking-tasks"


class TaskDetailView:
    """
    拣货任务详情：
    - task  ：按 task_id 加载
    - order ：依赖 task.order_id 的二级加载（task 未到时依赖键为 None，不发请求）
    - complete 成功后 refetch 任务，并在短延迟后跳回任务列表（close 时取消）
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        task_id: int,
        *,
        navigate: Optional[Callable[[str], None]] = None,
        dependents: Sequence[RemoteState] = (),
        settings: Optional[ConsoleSettings] = None,
    ) -> None:
        self.gateway = gateway
        self.settings = settings or get_settings()
        self.navigate = navigate
        self.dependents = list(dependents)

        self.task: RemoteState[PickingTask] = RemoteState(
            gateway.picking_tasks.get, deps=(int(task_id),), name="task_detail"
        )
        self.order: RemoteState[Optional[Order]] = RemoteState(
            self._fetch_order, deps=(None,), name="task_order"
        )
        self._complete = PickTaskCompleteService(gateway)
        self._redirect: Optional[asyncio.TimerHandle] = None

    async def _fetch_order(self, order_id: Optional[int]) -> Optional[Order]:
        if order_id is None:
            return None
        return await self.gateway.orders.get(order_id)

    async def _sync_order(self) -> None:
        task = self.task.data
        await self.order.set_deps(task.order_id if task is not None else None)

    async def mount(self) -> None:
        await self.task.load()
        await self._sync_order()

    def _cancel_redirect(self) -> None:
        if self._redirect is not None:
            self._redirect.cancel()
            self._redirect = None

    def close(self) -> None:
        self._cancel_redirect()
        self.task.close()
        self.order.close()

    @property
    def loading(self) -> bool:
        return self.task.loading or self.order.loading

    @property
    def error(self) -> Optional[Exception]:
        return self.task.error or self.order.error

    @property
    def redirect_pending(self) -> bool:
        return self._redirect is not None

    def _current(self) -> PickingTask:
        if self.task.data is None:
            raise NotFoundError("Task not found")
        return self.task.data

    def actions(self) -> TaskActions:
        return task_actions(self._current().status)

    def timeline(self) -> TaskTimeline:
        return task_timeline(self._current().status)

    def line_items(self) -> List[PickLine]:
        return pick_lines(self._current(), self.order.data)

    def _go_back(self) -> None:
        self._redirect = None
        if self.navigate is not None:
            self.navigate(TASKS_PATH)

    async def complete(self, *, confirm: Optional[Confirm] = None) -> Optional[PickingTask]:
        updated = await self._complete.complete(self._current(), confirm=confirm)
        if updated is None:
            return None

        await invalidate(self.task, *self.dependents)
        await self._sync_order()

        # 同一时刻最多一个待执行的跳转
        self._cancel_redirect()
        if not self.task.closed:
            loop = asyncio.get_running_loop()
            self._redirect = loop.call_later(self.settings.TASK_COMPLETE_REDIRECT_SECONDS, self._go_back)
        return updated
