# wmsconsole/services/order_cancel.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from wmsconsole.gateway import RemoteGateway
from wmsconsole.gateway.errors import IllegalTransitionError
from wmsconsole.schemas.order import Order
from wmsconsole.services.order_status import can_cancel

logger = logging.getLogger("wmsconsole.order_cancel")

Confirm = Callable[[str], bool]


class OrderCancelService:
    """
    客户端唯一的订单跃迁：cancel（仅 NEW / ALLOCATED）。

    返回远端给出的订单（状态以服务端为准，不在本地假定为 CANCELLED）；
    用户在确认环节放弃时返回 None，不发请求。
    """

    def __init__(self, gateway: RemoteGateway) -> None:
        self.gateway = gateway

    async def cancel(self, order: Order, *, confirm: Optional[Confirm] = None) -> Optional[Order]:
        if not can_cancel(order.status):
            raise IllegalTransitionError("Order", order.id, order.status.value, "cancel")

        if confirm is not None and not confirm(f"Are you sure you want to cancel Order #{order.id}?"):
            return None

        updated = await self.gateway.orders.cancel(order.id)
        logger.info("order #%s: cancel %s -> %s", order.id, order.status.value, updated.status.value)
        return updated
