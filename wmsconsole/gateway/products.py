# wmsconsole/gateway/products.py
from __future__ import annotations

from typing import Any, List

from wmsconsole.gateway.client import RemoteClient, parse_many, parse_one
from wmsconsole.gateway.errors import RemoteRejectedError
from wmsconsole.schemas.product import Product, ProductIn

# 库存检查被远端以业务规则拒绝时的状态码
_STOCK_REJECT_CODES = {400, 409, 422}


def _stock_verdict(body: Any) -> bool:
    """
    2xx 响应体 → 是否可用：
    - false / {"available": false} / {"sufficient": false} → 不可用
    - 其它（true、空 body、无相关字段）→ 可用
    """
    if isinstance(body, bool):
        return body
    if isinstance(body, dict):
        for key in ("available", "sufficient", "inStock"):
            if key in body:
                return bool(body[key])
    return True


class ProductsApi:
    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    async def list_all(self) -> List[Product]:
        rows = await self.client.get("/api/products")
        return parse_many(Product, rows)

    async def get(self, product_id: int) -> Product:
        return parse_one(Product, await self.client.get(f"/api/products/{int(product_id)}"))

    async def get_by_sku(self, sku: str) -> Product:
        return parse_one(Product, await self.client.get(f"/api/products/sku/{sku}"))

    async def create(self, product: ProductIn) -> Product:
        return parse_one(Product, await self.client.post("/api/products", product.to_wire()))

    async def update(self, product_id: int, product: ProductIn) -> Product:
        body = await self.client.put(f"/api/products/{int(product_id)}", product.to_wire())
        return parse_one(Product, body)

    async def delete(self, product_id: int) -> None:
        await self.client.delete(f"/api/products/{int(product_id)}")

    async def check_stock(self, sku: str, quantity: int) -> bool:
        """
        询问远端 sku 是否还有 quantity 件可用（仅建议性，不做预占）。

        网络错误 / 404 / 5xx 原样抛出，由调用方区分。
        """
        try:
            body = await self.client.get(f"/api/products/{sku}/stock/{int(quantity)}")
        except RemoteRejectedError as exc:
            if exc.status_code in _STOCK_REJECT_CODES:
                return False
            raise
        return _stock_verdict(body)
