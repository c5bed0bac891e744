# wmsconsole/gateway/errors.py
from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, Optional


class ErrorKind(StrEnum):
    NETWORK = "NETWORK"  # 传输/连通性失败
    VALIDATION = "VALIDATION"  # 发请求前的本地校验失败
    BUSINESS_RULE = "BUSINESS_RULE"  # 业务规则拒绝（库存不足 / 非法跃迁）
    NOT_FOUND = "NOT_FOUND"  # 详情查询目标不存在
    REMOTE = "REMOTE"  # 远端其它非 2xx


class GatewayError(Exception):
    kind: ErrorKind = ErrorKind.REMOTE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(GatewayError):
    kind = ErrorKind.NETWORK


class NotFoundError(GatewayError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class RemoteRejectedError(GatewayError):
    """远端返回非 2xx（404 除外）。message 优先取远端 body.message。"""

    kind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


class RemoteProtocolError(RemoteRejectedError):
    """2xx 但响应体不是合法 JSON，或与线上模型对不上。"""

    def __init__(self, message: str, *, status_code: int = 200) -> None:
        super().__init__(message, status_code=status_code)


class InsufficientStockError(GatewayError):
    kind = ErrorKind.BUSINESS_RULE

    def __init__(self, sku: str, available: int, requested: int) -> None:
        super().__init__(f"Insufficient stock. Only {available} available.")
        self.sku = sku
        self.available = available
        self.requested = requested


class IllegalTransitionError(GatewayError):
    kind = ErrorKind.BUSINESS_RULE

    def __init__(self, entity: str, entity_id: int, status: str, action: str) -> None:
        super().__init__(f"{entity} #{entity_id} cannot {action} while {status}")
        self.entity = entity
        self.entity_id = entity_id
        self.status = status
        self.action = action


class DraftValidationError(GatewayError):
    kind = ErrorKind.VALIDATION


class EmptyDraftError(DraftValidationError):
    def __init__(self) -> None:
        super().__init__("Please add at least one item to the order")


def error_message(error: Any) -> str:
    """错误 → 面向用户的一句话。"""
    if isinstance(error, str):
        return error
    if isinstance(error, RemoteRejectedError):
        msg = error.payload.get("message")
        if msg:
            return str(msg)
    if isinstance(error, BaseException) and str(error):
        return str(error)
    return "An unexpected error occurred"
