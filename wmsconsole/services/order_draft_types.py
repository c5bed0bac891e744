# wmsconsole/services/order_draft_types.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional

from wmsconsole.schemas.order import OrderCreate, OrderLineIn


@dataclass(frozen=True)
class DraftLine:
    """
    草稿行：

    - product_sku     : 主键，草稿内唯一
    - product_name    : 展示用
    - available_stock : 加入/更新时看到的库存快照（不是预占）
    - quantity        : > 0
    """

    product_sku: str
    product_name: str
    available_stock: int
    quantity: int


@dataclass(frozen=True)
class OrderDraft:
    """
    客户端本地、未提交的订单草稿：sku → DraftLine 的有序映射（保持插入顺序）。

    所有变更都返回新对象，旧对象保持不变，提交失败时草稿天然保留。
    """

    lines: Dict[str, DraftLine] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[DraftLine]:
        return iter(self.lines.values())

    def __contains__(self, sku: object) -> bool:
        return sku in self.lines

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_units(self) -> int:
        return sum(line.quantity for line in self.lines.values())

    def get(self, sku: str) -> Optional[DraftLine]:
        return self.lines.get(sku)

    def quantity_of(self, sku: str) -> int:
        line = self.lines.get(sku)
        return line.quantity if line is not None else 0

    def upsert(self, line: DraftLine) -> "OrderDraft":
        # dict 赋值已存在的 key 不改变其位置
        lines = dict(self.lines)
        lines[line.product_sku] = line
        return OrderDraft(lines=lines)

    def with_quantity(self, sku: str, quantity: int) -> "OrderDraft":
        return self.upsert(replace(self.lines[sku], quantity=quantity))

    def without(self, sku: str) -> "OrderDraft":
        if sku not in self.lines:
            return self
        lines = {k: v for k, v in self.lines.items() if k != sku}
        return OrderDraft(lines=lines)

    def as_rows(self) -> List[DraftLine]:
        return list(self.lines.values())

    def to_order_create(self) -> OrderCreate:
        return OrderCreate(
            order_line_items=[
                OrderLineIn(product_sku=line.product_sku, quantity=line.quantity)
                for line in self.lines.values()
            ]
        )


@dataclass(frozen=True)
class ComposeStep:
    number: int
    title: str
    description: str


COMPOSE_STEPS = (
    ComposeStep(1, "Add Products", "Search and add products to order"),
    ComposeStep(2, "Review Order", "Review and confirm order details"),
    ComposeStep(3, "Confirmation", "Order confirmation and completion"),
)
