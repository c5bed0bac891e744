# wmsconsole/views/lists.py
from __future__ import annotations

from typing import Dict, List, Optional

from wmsconsole.core.config import ConsoleSettings, get_settings
from wmsconsole.gateway import RemoteGateway
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.picking_task import PickingTask
from wmsconsole.schemas.product import Product
from wmsconsole.services.list_queries import (
    ALL,
    SortOrder,
    filter_orders,
    filter_products,
    filter_tasks,
    order_status_counts,
    task_status_counts,
    toggle_sort,
)
from wmsconsole.services.order_cancel import Confirm, OrderCancelService
from wmsconsole.services.pick_task_complete import PickTaskCompleteService
from wmsconsole.services.remote_state import RemoteState


class _ListView:
    state: RemoteState
    sort_by: str
    sort_order: SortOrder

    async def mount(self) -> None:
        await self.state.load()

    async def refresh(self):
        return await self.state.refetch()

    def close(self) -> None:
        self.state.close()

    def sort(self, field: str) -> None:
        self.sort_by, self.sort_order = toggle_sort(self.sort_by, self.sort_order, field)

    @property
    def total(self) -> int:
        return len(self.state.data or [])


class OrdersListView(_ListView):
    def __init__(self, gateway: RemoteGateway) -> None:
        self.state: RemoteState[List[Order]] = RemoteState(gateway.orders.list_all, name="orders_list")
        self.status_filter = ALL
        self.sort_by = "createdAt"
        self.sort_order: SortOrder = "desc"
        self._cancel = OrderCancelService(gateway)

    def rows(self) -> List[Order]:
        return filter_orders(
            self.state.data, status=self.status_filter, sort_by=self.sort_by, order=self.sort_order
        )

    def counts(self) -> Dict[str, int]:
        return order_status_counts(self.state.data)

    async def cancel(self, order: Order, *, confirm: Optional[Confirm] = None) -> Optional[Order]:
        updated = await self._cancel.cancel(order, confirm=confirm)
        if updated is not None:
            await self.state.refetch()
        return updated


class PickingTasksListView(_ListView):
    def __init__(self, gateway: RemoteGateway) -> None:
        self.state: RemoteState[List[PickingTask]] = RemoteState(
            gateway.picking_tasks.list_all, name="picking_tasks_list"
        )
        self.status_filter = ALL
        self.sort_by = "id"
        self.sort_order: SortOrder = "desc"
        self._complete = PickTaskCompleteService(gateway)

    def rows(self) -> List[PickingTask]:
        return filter_tasks(
            self.state.data, status=self.status_filter, sort_by=self.sort_by, order=self.sort_order
        )

    def counts(self) -> Dict[str, int]:
        return task_status_counts(self.state.data)

    async def complete(
        self, task: PickingTask, *, confirm: Optional[Confirm] = None
    ) -> Optional[PickingTask]:
        updated = await self._complete.complete(task, confirm=confirm)
        if updated is not None:
            await self.state.refetch()
        return updated


class ProductsListView(_ListView):
    def __init__(self, gateway: RemoteGateway, *, settings: Optional[ConsoleSettings] = None) -> None:
        self.gateway = gateway
        self.settings = settings or get_settings()
        self.state: RemoteState[List[Product]] = RemoteState(
            gateway.products.list_all, name="products_list"
        )
        self.search = ""
        self.low_stock_only = False
        self.sort_by = "name"
        self.sort_order: SortOrder = "asc"

    def rows(self) -> List[Product]:
        return filter_products(
            self.state.data,
            search=self.search,
            low_stock_only=self.low_stock_only,
            threshold=self.settings.LOW_STOCK_THRESHOLD,
            sort_by=self.sort_by,
            order=self.sort_order,
        )

    async def delete(self, product: Product, *, confirm: Optional[Confirm] = None) -> bool:
        if confirm is not None and not confirm(f'Are you sure you want to delete "{product.name}"?'):
            return False
        await self.gateway.products.delete(product.id)
        await self.state.refetch()
        return True
