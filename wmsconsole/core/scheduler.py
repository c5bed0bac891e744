# wmsconsole/core/scheduler.py
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger("wmsconsole.poller")

PollFn = Callable[[], Awaitable[object]]


class ViewPoller:
    """
    视图级轮询器：每个挂载中的视图持有自己的 AsyncIOScheduler，
    卸载时 close() 撤掉全部 job 并关停调度器，不存在进程级常驻 interval。

    - add(name, fn)：按固定间隔调用 fn（协程函数），各 name 相互独立
    - close()      ：幂等；close 之后不会再触发任何 fn
    """

    def __init__(self, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self.interval_seconds = float(interval_seconds)
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._jobs: Dict[str, Job] = {}
        self._closed = False

    @property
    def running(self) -> bool:
        return self._scheduler is not None and not self._closed

    def job_names(self) -> List[str]:
        return sorted(self._jobs)

    def add(self, name: str, fn: PollFn) -> None:
        if self._closed:
            raise RuntimeError("poller already closed")
        if name in self._jobs:
            raise ValueError(f"duplicate poll job: {name}")

        if self._scheduler is None:
            # 必须在事件循环内启动
            self._scheduler = AsyncIOScheduler()
            self._scheduler.start()

        async def _tick() -> None:
            if self._closed:
                return
            try:
                await fn()
            except Exception as exc:
                # 轮询失败只记日志，错误已由 RemoteState 写入自身 error 字段
                logger.warning("poll %s failed: %s", name, exc)

        self._jobs[name] = self._scheduler.add_job(
            _tick,
            "interval",
            seconds=self.interval_seconds,
            id=name,
            coalesce=True,
            max_instances=1,
        )
        logger.debug("poll %s scheduled every %.1fs", name, self.interval_seconds)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for job in list(self._jobs.values()):
            job.remove()
        self._jobs.clear()
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
