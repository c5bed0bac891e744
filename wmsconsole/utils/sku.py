# wmsconsole/utils/sku.py
from __future__ import annotations

import random
import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9\s]")


def generate_sku(name: Optional[str], rng: Optional[random.Random] = None) -> str:
    """
    由商品名生成 SKU：
    - 去掉非字母数字字符
    - 单词 → 取前 6 位；多词 → 每词取前 2 位
    - 全大写 + 3 位随机数字（补零）

    例如 "Blue Widget" → "BLWI042"。名称为空或无有效字符时返回 ""。
    """
    if not name:
        return ""

    words = [w for w in _NON_ALNUM.sub("", name).split() if w]
    if not words:
        return ""

    if len(words) == 1:
        stem = words[0][:6]
    else:
        stem = "".join(w[:2] for w in words)

    suffix = (rng or random).randrange(1000)
    return f"{stem.upper()}{suffix:03d}"
