# tests/services/test_remote_state.py
import asyncio

import pytest

from wmsconsole.services.remote_state import RemoteState, invalidate

pytestmark = pytest.mark.asyncio


class _Gate:
    """按调用顺序发放 asyncio.Event，测试自己决定哪个请求先返回。"""

    def __init__(self):
        self.events = []
        self.calls = []

    async def fetch(self, key=None):
        ev = asyncio.Event()
        self.events.append(ev)
        self.calls.append(key)
        n = len(self.events)
        await ev.wait()
        return f"{key}#{n}"


async def test_load_success_sets_data():
    async def fetch():
        return [1, 2]

    st = RemoteState(fetch, name="rows")
    assert st.data is None and st.loading is False
    await st.load()
    assert st.data == [1, 2]
    assert st.error is None
    assert st.ready


async def test_load_once_per_deps():
    calls = []

    async def fetch(key):
        calls.append(key)
        return key

    st = RemoteState(fetch, deps=(1,))
    await st.load()
    await st.load()
    assert calls == [1]

    await st.set_deps(2)
    await st.set_deps(2)
    assert calls == [1, 2]
    assert st.data == 2


async def test_load_failure_is_captured():
    async def fetch():
        raise RuntimeError("down")

    st = RemoteState(fetch)
    await st.load()
    assert isinstance(st.error, RuntimeError)
    assert st.loading is False
    assert st.data is None


async def test_refetch_failure_propagates_and_keeps_old_data():
    state = {"fail": False}

    async def fetch():
        if state["fail"]:
            raise RuntimeError("boom")
        return "v1"

    st = RemoteState(fetch)
    await st.load()
    state["fail"] = True
    with pytest.raises(RuntimeError):
        await st.refetch()
    assert st.error is not None
    assert st.data == "v1"

    state["fail"] = False
    await st.refetch()
    assert st.error is None


async def test_last_issued_wins_when_responses_arrive_out_of_order():
    gate = _Gate()
    st = RemoteState(gate.fetch, deps=("a",))

    first = asyncio.create_task(st.refetch())
    await asyncio.sleep(0)
    second = asyncio.create_task(st.refetch())
    await asyncio.sleep(0)
    assert len(gate.events) == 2
    assert st.loading is True

    # 后发的先回
    gate.events[1].set()
    assert await second == "a#2"
    assert st.data == "a#2"
    assert st.loading is False

    # 先发的晚到：响应被丢弃
    gate.events[0].set()
    assert await first == "a#1"
    assert st.data == "a#2"


async def test_switching_deps_drops_stale_response():
    gate = _Gate()
    st = RemoteState(gate.fetch, deps=(1,))

    t1 = asyncio.create_task(st.load())
    await asyncio.sleep(0)
    t2 = asyncio.create_task(st.set_deps(2))
    await asyncio.sleep(0)
    assert gate.calls == [1, 2]

    gate.events[0].set()
    await t1
    assert st.data is None
    assert st.loading is True

    gate.events[1].set()
    await t2
    assert st.data == "2#2"


async def test_close_drops_in_flight_response():
    gate = _Gate()
    st = RemoteState(gate.fetch)
    task = asyncio.create_task(st.refetch())
    await asyncio.sleep(0)

    st.close()
    gate.events[0].set()
    await task
    assert st.data is None
    assert st.loading is False

    # 关闭后不再发起加载
    await st.load()
    assert len(gate.events) == 1


async def test_invalidate_refetches_all_and_absorbs_failures():
    seen = []

    async def ok():
        seen.append("ok")
        return "ok"

    async def bad():
        seen.append("bad")
        raise RuntimeError("nope")

    a, b = RemoteState(ok, name="a"), RemoteState(bad, name="b")
    closed = RemoteState(ok, name="closed")
    closed.close()

    await invalidate(a, b, closed)
    assert sorted(seen) == ["bad", "ok"]
    assert a.data == "ok"
    assert isinstance(b.error, RuntimeError)
    assert closed.data is None
