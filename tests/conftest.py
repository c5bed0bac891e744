# tests/conftest.py
from __future__ import annotations

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from tests.helpers.fake_remote import FakeStore, build_app, seeded_store
from wmsconsole.core.config import ConsoleSettings
from wmsconsole.gateway import RemoteGateway


@pytest.fixture
def settings() -> ConsoleSettings:
    """
    测试设置：不读 .env；跳转延迟压到很短，方便断言定时器行为。
    """
    return ConsoleSettings(
        _env_file=None,
        API_BASE_URL="http://test",
        POLL_INTERVAL_SECONDS=30,
        TASK_COMPLETE_REDIRECT_SECONDS=0.05,
    )


@pytest.fixture
def store() -> FakeStore:
    return seeded_store()


@pytest_asyncio.fixture(scope="function")
async def gateway(store: FakeStore, settings: ConsoleSettings) -> AsyncGenerator[RemoteGateway, None]:
    """
    RemoteGateway → httpx.ASGITransport → 内存 FastAPI，全程不出进程。
    """
    transport = httpx.ASGITransport(app=build_app(store))
    gw = RemoteGateway.connect(settings, transport=transport)
    try:
        yield gw
    finally:
        await gw.aclose()
