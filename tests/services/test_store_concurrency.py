"""Store Concurrency — the pause is the only interleaving point, and writes race across it.

Tests cover:
    - Two updates of one id: the one whose pause resolves last wins, whatever the call order
    - Reads issued while a write is pending see the pre-write state
    - A payload error surfaces before the pause is ever awaited
"""

import asyncio

import pytest

from todomock.core.errors import MalformedInputError
from todomock.services.store import Store


class GatedPause:
    """Pause whose n-th call resolves only when gates[n] is set."""

    def __init__(self):
        self.gates: list[asyncio.Event] = []

    async def __call__(self) -> None:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()

    async def wait_for_callers(self, count: int) -> None:
        while len(self.gates) < count:
            await asyncio.sleep(0)


@pytest.fixture
def gated():
    pause = GatedPause()
    store = Store(latency=pause)
    store.seed([], [{"id": "t1", "title": "original"}])
    return pause, store


async def test_last_resolved_update_wins_regardless_of_call_order(gated):
    pause, store = gated
    first = asyncio.create_task(store.todos.update({"id": "t1", "title": "first"}))
    second = asyncio.create_task(store.todos.update({"id": "t1", "title": "second"}))
    await pause.wait_for_callers(2)

    pause.gates[1].set()
    assert (await second)["title"] == "second"
    pause.gates[0].set()
    assert (await first)["title"] == "first"

    assert store.todo_records["t1"].title == "first"


async def test_in_call_order_resolution_lets_the_later_call_win(gated):
    pause, store = gated
    first = asyncio.create_task(store.todos.update({"id": "t1", "title": "first"}))
    second = asyncio.create_task(store.todos.update({"id": "t1", "title": "second"}))
    await pause.wait_for_callers(2)

    pause.gates[0].set()
    await first
    pause.gates[1].set()
    await second

    assert store.todo_records["t1"].title == "second"


async def test_updates_are_not_serialized(gated):
    pause, store = gated
    tasks = [
        asyncio.create_task(store.todos.update({"id": "t1", "title": f"v{i}"}))
        for i in range(3)
    ]
    # All three are suspended at once: no lock held between them
    await pause.wait_for_callers(3)
    assert not any(task.done() for task in tasks)

    for gate in reversed(pause.gates):
        gate.set()
    await asyncio.gather(*tasks)
    assert store.todo_records["t1"].title == "v0"


async def test_read_during_pending_write_sees_old_state(gated):
    pause, store = gated
    write = asyncio.create_task(store.todos.update({"id": "t1", "title": "new"}))
    await pause.wait_for_callers(1)
    read = asyncio.create_task(store.todos.get_by_id("t1"))
    await pause.wait_for_callers(2)

    pause.gates[1].set()
    assert (await read)["title"] == "original"
    pause.gates[0].set()
    assert (await write)["title"] == "new"


async def test_malformed_payload_fails_before_pausing(gated):
    pause, store = gated
    with pytest.raises(MalformedInputError):
        await store.todos.update({"id": "t1", "completed": [1, 2]})
    assert pause.gates == []
