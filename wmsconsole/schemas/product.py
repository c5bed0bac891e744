# wmsconsole/schemas/product.py
from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator

from wmsconsole.schemas._base import _Base


class Product(_Base):
    """
    目录商品（出参）。quantity_in_stock 只在远端权威，本地仅作快照。
    """

    id: int
    sku: str
    name: str
    location_code: str = ""
    quantity_in_stock: Annotated[int, Field(ge=0)] = 0


class ProductIn(_Base):
    """
    新建 / 编辑商品入参。名称、库位长度等表单规则由表单层负责，这里只保证类型与 SKU 形态。
    """

    sku: Annotated[str, Field(min_length=1, max_length=64, pattern=r"^[A-Z0-9]+$")]
    name: Annotated[str, Field(min_length=1)]
    location_code: Annotated[str, Field(min_length=1)]
    quantity_in_stock: Annotated[int, Field(ge=0)] = 0

    @field_validator("sku", mode="before")
    @classmethod
    def _upper_sku(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v
