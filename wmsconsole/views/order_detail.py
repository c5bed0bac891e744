# wmsconsole/views/order_detail.py
from __future__ import annotations

from typing import List, Optional, Sequence

from wmsconsole.gateway import RemoteGateway
from wmsconsole.gateway.errors import NotFoundError
from wmsconsole.schemas.order import Order, OrderLineItem
from wmsconsole.services.order_cancel import Confirm, OrderCancelService
from wmsconsole.services.order_status import OrderActions, OrderTimeline, order_actions, timeline
from wmsconsole.services.remote_state import RemoteState, invalidate


class OrderDetailView:
    """
    订单详情：按 order_id 加载；时间线 / 可用操作都由当前状态纯函数派生。

    dependents：取消成功后需要一起刷新的其它视图状态（列表、看板集合）。
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        order_id: int,
        *,
        dependents: Sequence[RemoteState] = (),
    ) -> None:
        self.order: RemoteState[Order] = RemoteState(
            gateway.orders.get, deps=(int(order_id),), name="order_detail"
        )
        self.dependents = list(dependents)
        self._cancel = OrderCancelService(gateway)

    async def mount(self) -> None:
        await self.order.load()

    async def show(self, order_id: int) -> None:
        """详情页之间切换：换依赖键即重新加载，旧请求的晚到响应被丢弃。"""
        await self.order.set_deps(int(order_id))

    def close(self) -> None:
        self.order.close()

    def _current(self) -> Order:
        if self.order.data is None:
            raise NotFoundError("Order not found")
        return self.order.data

    def timeline(self) -> OrderTimeline:
        return timeline(self._current().status)

    def actions(self) -> OrderActions:
        return order_actions(self._current().status)

    def line_items(self) -> List[OrderLineItem]:
        return list(self._current().order_line_items)

    async def cancel(self, *, confirm: Optional[Confirm] = None) -> Optional[Order]:
        updated = await self._cancel.cancel(self._current(), confirm=confirm)
        if updated is None:
            return None
        if not self.order.closed:
            self.order.data = updated
        await invalidate(self.order, *self.dependents)
        return updated
