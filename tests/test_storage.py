import asyncio

import pytest

from kiwistore.storage import (
    BgTaskHandler,
    CleanAll,
    CompactRange,
    Shutdown,
    Storage,
)
from kiwistore.types import DataType


class FakeInstance:
    def __init__(self):
        self.data = {}
        self.compactions = []

    def set(self, key, value):
        self.data[bytes(key)] = bytes(value)

    def get(self, key):
        return self.data[bytes(key)].decode("utf-8", errors="replace")

    def compact_range(self, start, end):
        self.compactions.append((start, end))


@pytest.mark.asyncio
async def test_bg_task_worker_concurrent():
    storage = Storage(1, 0)
    inst = FakeInstance()
    storage.insts.append(inst)
    handler = BgTaskHandler()
    storage.bg_task_handler = handler

    worker = asyncio.create_task(Storage.bg_task_worker(storage, handler))

    senders = []
    for _ in range(10):
        senders.append(asyncio.create_task(handler.send(CleanAll(DataType.ALL))))
        senders.append(
            asyncio.create_task(handler.send(CompactRange(DataType.ALL, "a", "z")))
        )
    await asyncio.gather(*senders)

    await handler.send(Shutdown())
    await asyncio.wait_for(worker, timeout=5)

    assert worker.done()
    assert inst.compactions == [("a", "z")] * 10
    assert handler.pending() == 0


@pytest.mark.asyncio
async def test_shutdown_stops_worker():
    storage = Storage(1, 0)
    handler = BgTaskHandler()
    storage.bg_task_handler = handler
    storage.bg_task = asyncio.create_task(Storage.bg_task_worker(storage, handler))
    task = storage.bg_task

    await asyncio.wait_for(storage.shutdown(), timeout=5)

    assert task.done()
    assert storage.bg_task is None


@pytest.mark.asyncio
async def test_worker_stops_at_shutdown_leaving_later_tasks():
    storage = Storage(1, 0)
    inst = FakeInstance()
    storage.insts.append(inst)
    handler = BgTaskHandler()
    await handler.send(CompactRange(DataType.STRING, "b", "c"))
    await handler.send(Shutdown())
    await handler.send(CompactRange(DataType.STRING, "x", "y"))

    await asyncio.wait_for(Storage.bg_task_worker(storage, handler), timeout=5)

    assert inst.compactions == [("b", "c")]
    assert handler.pending() == 1


@pytest.mark.asyncio
async def test_handler_receive_returns_sent_task_in_order():
    handler = BgTaskHandler(maxsize=4)
    await handler.send(CleanAll(DataType.HASH))
    await handler.send(CompactRange(DataType.LIST, "a", "b"))
    assert await handler.receive() == CleanAll(DataType.HASH)
    assert await handler.receive() == CompactRange(DataType.LIST, "a", "b")


def test_set_then_get_single_instance():
    storage = Storage(1, 0)
    storage.insts.append(FakeInstance())
    storage.set(b"test_key", b"test_value")
    assert storage.get(b"test_key") == "test_value"


def test_keys_land_in_exactly_one_instance():
    storage = Storage(3, 0)
    insts = [FakeInstance() for _ in range(3)]
    storage.insts.extend(insts)
    keys = [f"key{i}".encode() for i in range(30)]
    for key in keys:
        storage.set(key, b"v" + key)
    for key in keys:
        holders = [inst for inst in insts if key in inst.data]
        assert len(holders) == 1
        assert storage.get(key) == "v" + key.decode()
    assert sum(len(inst.data) for inst in insts) == 30


def test_get_without_instances_raises():
    storage = Storage(2, 0)
    with pytest.raises(RuntimeError):
        storage.get(b"missing")


def test_zero_instances_rejected():
    with pytest.raises(ValueError, match="greater than zero"):
        Storage(0, 0)


def test_new_storage_state():
    storage = Storage(4, 7)
    assert storage.db_instance_num == 4
    assert storage.db_id == 7
    assert storage.is_opened is False
    assert storage.insts == []
    assert storage.slot_indexer.instance_num == 4