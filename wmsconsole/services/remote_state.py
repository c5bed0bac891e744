# wmsconsole/services/remote_state.py
"""
远端状态同步器：所有列表/详情视图共用的 fetch / refetch 契约。

- load()    ：每个不同的依赖键只触发一次；loading=True → 完成后 data / error 二选一写入，
              并总是清掉 loading；失败被吸收进 error 字段（视图渲染错误态 + 重试）
- refetch() ：同一个请求，按需调用（变更后 / 定时器）；失败写入 error 后继续抛给调用方
- 不做去重、不取消在途请求；同一状态上后发起的请求胜出（last-issued-wins），
  先发后到的旧响应直接丢弃
- close()   ：视图卸载后不再写入任何状态
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, Tuple, TypeVar

logger = logging.getLogger("wmsconsole.remote_state")

T = TypeVar("T")

_NEVER_LOADED: Tuple[Any, ...] = ("<never-loaded>",)


class RemoteState(Generic[T]):
    def __init__(
        self,
        fetch: Callable[..., Awaitable[T]],
        *,
        deps: Tuple[Any, ...] = (),
        name: str = "",
    ) -> None:
        self._fetch = fetch
        self.deps: Tuple[Any, ...] = tuple(deps)
        self.name = name or getattr(fetch, "__name__", "remote")

        self.data: Optional[T] = None
        self.error: Optional[Exception] = None
        self.loading = False

        self._issued = 0
        self._loaded_deps: Tuple[Any, ...] = _NEVER_LOADED
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None and self.data is not None

    def _is_latest(self, seq: int) -> bool:
        return seq == self._issued and not self._closed

    async def _run(self) -> T:
        self._issued += 1
        seq = self._issued
        deps = self.deps
        if not self._closed:
            self.loading = True
            self.error = None

        try:
            value = await self._fetch(*deps)
        except Exception as exc:
            if self._is_latest(seq):
                self.error = exc
                self.loading = False
            raise

        if self._is_latest(seq):
            self.data = value
            self.loading = False
        else:
            logger.debug("%s: drop superseded response #%s (latest #%s)", self.name, seq, self._issued)
        return value

    async def load(self) -> None:
        if self._closed or self._loaded_deps == self.deps:
            return
        self._loaded_deps = self.deps
        try:
            await self._run()
        except Exception as exc:
            logger.warning("%s: load failed: %s", self.name, exc)

    async def set_deps(self, *deps: Any) -> None:
        self.deps = tuple(deps)
        await self.load()

    async def refetch(self) -> T:
        return await self._run()

    def close(self) -> None:
        self._closed = True
        self.loading = False


async def invalidate(*states: "RemoteState[Any]") -> None:
    """
    变更成功后刷新依赖视图：逐个 refetch（并发），单个失败只落到各自的 error 字段。
    """
    live = [s for s in states if s is not None and not s.closed]
    if not live:
        return
    results = await asyncio.gather(*(s.refetch() for s in live), return_exceptions=True)
    for state, res in zip(live, results):
        if isinstance(res, Exception):
            logger.warning("%s: refetch after mutation failed: %s", state.name, res)
