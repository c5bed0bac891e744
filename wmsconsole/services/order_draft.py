# wmsconsole/services/order_draft.py
"""
订单草稿聚合（按库存逐次校验）

规则：
  - add：同一 sku 合并数量；校验量 = 新增量 + 草稿已有量
  - update_quantity：替换而非累加；<= 0 等价于 remove
  - remove：无条件删除，不访问远端
  - submit：空草稿本地直接拒绝；成功后由调用方丢弃草稿，失败时草稿原样保留

库存校验只是建议性的（check-then-commit 之间没有锁），
真正的闸门是远端在创建订单时的库存运算，创建被拒属于正常错误路径。
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from wmsconsole.gateway import RemoteGateway
from wmsconsole.gateway.errors import DraftValidationError, EmptyDraftError, InsufficientStockError
from wmsconsole.schemas.order import Order
from wmsconsole.schemas.product import Product
from wmsconsole.services.order_draft_types import COMPOSE_STEPS, ComposeStep, DraftLine, OrderDraft

logger = logging.getLogger("wmsconsole.order_draft")


class OrderDraftService:
    """
    每个变更拆成两步：
    - check_*：访问远端做库存校验（可能挂起，不碰草稿）
    - apply_*：纯函数，把变更落到调用方手里“当前”的草稿上

    add / update_quantity 是两步连用的便捷写法；有并发变更的会话（OrderComposer）
    必须在 await 之后基于最新草稿调用 apply_*，否则会覆盖掉其间完成的变更。
    """

    def __init__(self, gateway: RemoteGateway) -> None:
        self.gateway = gateway

    async def _ensure_available(self, sku: str, requested: int, available_hint: int) -> None:
        ok = await self.gateway.products.check_stock(sku, requested)
        if not ok:
            logger.info("stock check rejected: sku=%s requested=%s", sku, requested)
            raise InsufficientStockError(sku=sku, available=available_hint, requested=requested)

    # ---------- add ----------

    async def check_add(self, draft: OrderDraft, product: Product, quantity: int) -> None:
        if quantity <= 0:
            raise DraftValidationError("Quantity must be greater than 0")
        requested_total = quantity + draft.quantity_of(product.sku)
        await self._ensure_available(product.sku, requested_total, product.quantity_in_stock)

    def apply_add(self, draft: OrderDraft, product: Product, quantity: int) -> OrderDraft:
        existing = draft.get(product.sku)
        line = DraftLine(
            product_sku=product.sku,
            product_name=existing.product_name if existing else product.name,
            available_stock=product.quantity_in_stock,
            quantity=quantity + draft.quantity_of(product.sku),
        )
        return draft.upsert(line)

    async def add(self, draft: OrderDraft, product: Product, quantity: int) -> OrderDraft:
        await self.check_add(draft, product, quantity)
        return self.apply_add(draft, product, quantity)

    # ---------- update ----------

    async def check_update(self, draft: OrderDraft, sku: str, new_quantity: int) -> None:
        line = draft.get(sku)
        if new_quantity <= 0 or line is None:
            return
        await self._ensure_available(sku, new_quantity, line.available_stock)

    def apply_update(self, draft: OrderDraft, sku: str, new_quantity: int) -> OrderDraft:
        if new_quantity <= 0:
            return self.remove(draft, sku)
        if sku not in draft:
            # 校验期间该行已被删掉
            return draft
        return draft.with_quantity(sku, new_quantity)

    async def update_quantity(self, draft: OrderDraft, sku: str, new_quantity: int) -> OrderDraft:
        await self.check_update(draft, sku, new_quantity)
        return self.apply_update(draft, sku, new_quantity)

    def remove(self, draft: OrderDraft, sku: str) -> OrderDraft:
        return draft.without(sku)

    async def submit(self, draft: OrderDraft) -> Order:
        if draft.is_empty:
            raise EmptyDraftError()
        order = await self.gateway.orders.create(draft.to_order_create())
        logger.info("order #%s created with %s line(s)", order.id, len(draft))
        return order


class OrderComposer:
    """
    组单会话（Add Products → Review Order → Confirmation）。

    持有草稿与临时选择状态（search_term / selected_product / quantity），
    草稿只存在于 start 到 submit 成功之间。
    """

    def __init__(
        self,
        service: OrderDraftService,
        *,
        products: Optional[List[Product]] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.service = service
        self.products: List[Product] = list(products or [])
        self.navigate = navigate

        self.draft = OrderDraft()
        self.search_term = ""
        self.selected_product: Optional[Product] = None
        self.quantity = 1
        self.current_step = 1
        self.created_order: Optional[Order] = None

    @property
    def steps(self) -> tuple[ComposeStep, ...]:
        return COMPOSE_STEPS

    # ---------- 选择 ----------

    def filtered_products(self) -> List[Product]:
        term = self.search_term.lower()
        return [p for p in self.products if term in p.name.lower() or term in p.sku.lower()]

    def select(self, product: Product, quantity: int = 1) -> None:
        self.selected_product = product
        self.quantity = quantity

    def _reset_selection(self) -> None:
        self.selected_product = None
        self.quantity = 1
        self.search_term = ""

    # ---------- 草稿变更 ----------

    async def add_selected(self) -> OrderDraft:
        product, quantity = self.selected_product, self.quantity
        if product is None:
            raise DraftValidationError("Please select a product")
        await self.service.check_add(self.draft, product, quantity)
        # await 期间草稿可能已被其它变更替换，合并到最新的草稿上
        self.draft = self.service.apply_add(self.draft, product, quantity)
        self._reset_selection()
        return self.draft

    async def update_quantity(self, sku: str, new_quantity: int) -> OrderDraft:
        await self.service.check_update(self.draft, sku, new_quantity)
        self.draft = self.service.apply_update(self.draft, sku, new_quantity)
        return self.draft

    def remove(self, sku: str) -> OrderDraft:
        self.draft = self.service.remove(self.draft, sku)
        return self.draft

    # ---------- 步骤 ----------

    def review(self) -> None:
        if self.draft.is_empty:
            raise EmptyDraftError()
        self.current_step = 2

    def back(self) -> None:
        self.current_step = 1

    async def submit(self) -> Order:
        order = await self.service.submit(self.draft)
        self.created_order = order
        self.draft = OrderDraft()
        self.current_step = 3
        if self.navigate is not None:
            self.navigate(f"/orders/{order.id}")
        return order
