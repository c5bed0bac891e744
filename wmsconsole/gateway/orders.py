# wmsconsole/gateway/orders.py
from __future__ import annotations

from typing import List

from wmsconsole.gateway.client import RemoteClient, parse_many, parse_one
from wmsconsole.models.enums import OrderStatus
from wmsconsole.schemas.order import Order, OrderCreate


class OrdersApi:
    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    async def list_all(self) -> List[Order]:
        rows = await self.client.get("/api/orders")
        return parse_many(Order, rows)

    async def get(self, order_id: int) -> Order:
        return parse_one(Order, await self.client.get(f"/api/orders/{int(order_id)}"))

    async def list_by_status(self, status: OrderStatus) -> List[Order]:
        rows = await self.client.get(f"/api/orders/status/{OrderStatus(status).value}")
        return parse_many(Order, rows)

    async def create(self, payload: OrderCreate) -> Order:
        return parse_one(Order, await self.client.post("/api/orders", payload.to_wire()))

    async def cancel(self, order_id: int) -> Order:
        return parse_one(Order, await self.client.put(f"/api/orders/{int(order_id)}/cancel"))
