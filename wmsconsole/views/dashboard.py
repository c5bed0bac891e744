# wmsconsole/views/dashboard.py
from __future__ import annotations

import asyncio
from typing import List, Optional

from wmsconsole.core.config import ConsoleSettings, get_settings
from wmsconsole.core.scheduler import ViewPoller
from wmsconsole.gateway import RemoteGateway
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.schemas.product import Product
from wmsconsole.services.dashboard_metrics import DashboardMetrics, compute_metrics
from wmsconsole.services.remote_state import RemoteState


class DashboardView:
    """
    看板：三类集合各自独立加载，并在挂载期间每 POLL_INTERVAL_SECONDS 各自 refetch。

    用法：
        async with DashboardView(gateway) as view:
            view.metrics()
    """

    def __init__(self, gateway: RemoteGateway, *, settings: Optional[ConsoleSettings] = None) -> None:
        self.settings = settings or get_settings()
        self.products: RemoteState[List[Product]] = RemoteState(
            gateway.products.list_all, name="products"
        )
        self.orders: RemoteState[List[Order]] = RemoteState(gateway.orders.list_all, name="orders")
        self.tasks: RemoteState[List[PickingTask]] = RemoteState(
            gateway.picking_tasks.list_all, name="picking_tasks"
        )
        self.poller = ViewPoller(self.settings.POLL_INTERVAL_SECONDS)

    @property
    def states(self) -> List[RemoteState]:
        return [self.products, self.orders, self.tasks]

    async def mount(self, *, poll: bool = True) -> None:
        await asyncio.gather(*(s.load() for s in self.states))
        if not poll:
            return
        for state in self.states:
            self.poller.add(state.name, state.refetch)

    def close(self) -> None:
        self.poller.close()
        for state in self.states:
            state.close()

    async def __aenter__(self) -> "DashboardView":
        await self.mount()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    @property
    def loading(self) -> bool:
        return any(s.loading for s in self.states)

    @property
    def error(self) -> Optional[Exception]:
        for s in self.states:
            if s.error is not None:
                return s.error
        return None

    async def retry(self) -> None:
        await asyncio.gather(*(s.refetch() for s in self.states if s.error is not None))

    def metrics(self) -> DashboardMetrics:
        return compute_metrics(
            self.products.data,
            self.orders.data,
            self.tasks.data,
            low_stock_threshold=self.settings.LOW_STOCK_THRESHOLD,
            recent_limit=self.settings.RECENT_ORDERS_LIMIT,
            low_stock_preview=self.settings.LOW_STOCK_PREVIEW_LIMIT,
        )
