# wmsconsole/gateway/client.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from wmsconsole.core.config import ConsoleSettings
from wmsconsole.gateway.errors import (
    NetworkError,
    NotFoundError,
    RemoteProtocolError,
    RemoteRejectedError,
)

logger = logging.getLogger("wmsconsole.gateway")


async def _log_request(request: httpx.Request) -> None:
    logger.info("API Request: %s %s", request.method, request.url.path)


def _safe_json(resp: httpx.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"detail": data}


class RemoteClient:
    """
    远端 REST 传输层：只做 请求 → JSON / 异常 翻译，不含业务逻辑。

    异常约定：
    - httpx.TransportError（连不上 / 超时）→ NetworkError
    - 404                                  → NotFoundError
    - 其它非 2xx                           → RemoteRejectedError(status_code, message, payload)
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
            event_hooks={"request": [_log_request]},
        )

    @classmethod
    def from_settings(
        cls,
        settings: ConsoleSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RemoteClient":
        return cls(
            settings.API_BASE_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            resp = await self._http.request(method, path, json=json)
        except httpx.TransportError as exc:
            logger.warning("API Error: %s %s -> %r", method, path, exc)
            raise NetworkError(f"Network error: {exc}") from exc

        if resp.status_code == 404:
            logger.warning("API Error: %s %s -> 404", method, path)
            raise NotFoundError(f"Not found: {path}", path=path)

        if resp.is_error:
            payload = _safe_json(resp)
            message = str(
                payload.get("message")
                or payload.get("detail")
                or payload.get("error")
                or resp.reason_phrase
                or f"HTTP {resp.status_code}"
            )
            logger.error("API Error: %s %s -> %s %s", method, path, resp.status_code, payload or resp.text)
            raise RemoteRejectedError(message, status_code=resp.status_code, payload=payload)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("API Error: %s %s -> %s non-JSON body %r", method, path, resp.status_code, resp.text[:200])
            raise RemoteProtocolError("Invalid response from server", status_code=resp.status_code) from exc

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


# ---------- 响应体 → 模型 ----------

M = TypeVar("M", bound=BaseModel)


def parse_one(model: Type[M], body: Any) -> M:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        logger.error("API Error: malformed %s: %s", model.__name__, exc)
        raise RemoteProtocolError(f"Malformed {model.__name__} in server response") from exc


def parse_many(model: Type[M], rows: Any) -> List[M]:
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise RemoteProtocolError(f"Expected a list of {model.__name__}, got {type(rows).__name__}")
    return [parse_one(model, r) for r in rows]
