# wmsconsole/schemas/order.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field, field_validator

from wmsconsole.models.enums import OrderStatus
from wmsconsole.schemas._base import _Base


# ===== 行项目 入参 =====
class OrderLineIn(_Base):
    product_sku: Annotated[str, Field(min_length=1)]
    quantity: Annotated[int, Field(ge=1, description="数量，必须>=1")]


# ===== 创建订单 入参 =====
class OrderCreate(_Base):
    """
    提交草稿：{"orderLineItems": [{"productSku", "quantity"}, ...]}，保持草稿插入顺序。
    """

    order_line_items: list[OrderLineIn]

    @field_validator("order_line_items")
    @classmethod
    def _lines_non_empty(cls, v: list[OrderLineIn]):
        if not v:
            raise ValueError("订单行不能为空")
        return v


# ===== 出参：行项目 =====
class OrderLineItem(_Base):
    id: int | None = None
    product_sku: str
    quantity: Annotated[int, Field(ge=1)]


# ===== 出参：订单 =====
class Order(_Base):
    id: int
    status: OrderStatus
    created_at: datetime | None = None
    order_line_items: list[OrderLineItem] = Field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.order_line_items)

    @property
    def total_units(self) -> int:
        return sum(item.quantity for item in self.order_line_items)
