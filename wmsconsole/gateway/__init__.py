# wmsconsole/gateway/__init__.py
from __future__ import annotations

from typing import Optional

import httpx

from wmsconsole.core.config import ConsoleSettings, get_settings
from wmsconsole.gateway.client import RemoteClient
from wmsconsole.gateway.orders import OrdersApi
from wmsconsole.gateway.picking_tasks import PickingTasksApi
from wmsconsole.gateway.products import ProductsApi


class RemoteGateway:
    """
    三类资源的请求函数集合：gateway.products / gateway.orders / gateway.picking_tasks。
    """

    def __init__(self, client: RemoteClient) -> None:
        self.client = client
        self.products = ProductsApi(client)
        self.orders = OrdersApi(client)
        self.picking_tasks = PickingTasksApi(client)

    @classmethod
    def connect(
        cls,
        settings: Optional[ConsoleSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RemoteGateway":
        return cls(RemoteClient.from_settings(settings or get_settings(), transport=transport))

    async def __aenter__(self) -> "RemoteGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = ["RemoteClient", "RemoteGateway"]
