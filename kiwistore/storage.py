"""The storage front end that routes keys to instances and runs background tasks."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Union

from kiwistore.slot_indexer import SlotIndexer, key_to_slot_id
from kiwistore.types import DataType

log = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1000


@dataclass(frozen=True)
class CleanAll:
    """Remove all data of one type."""

    dtype: DataType


@dataclass(frozen=True)
class CompactRange:
    """Compact the keys between ``start`` and ``end``."""

    dtype: DataType
    start: str
    end: str


@dataclass(frozen=True)
class Shutdown:
    """Ask the background worker to stop."""


BgTask = Union[CleanAll, CompactRange, Shutdown]


class _Instance(Protocol):
    def set(self, key: bytes, value: bytes) -> None: ...

    def get(self, key: bytes) -> str: ...


class BgTaskHandler:
    """A bounded queue of background tasks."""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[BgTask] = asyncio.Queue(maxsize=maxsize)

    async def send(self, task: BgTask) -> None:
        """Queue a task, waiting while the queue is full."""
        await self._queue.put(task)

    async def receive(self) -> BgTask:
        """Wait for and return the next queued task."""
        return await self._queue.get()

    def pending(self) -> int:
        """Number of tasks waiting to be received."""
        return self._queue.qsize()


class Storage:
    """Spreads keys over a fixed number of storage instances."""

    def __init__(self, db_instance_num: int, db_id: int) -> None:
        self.slot_indexer = SlotIndexer(db_instance_num)
        self.insts: List[_Instance] = []
        self.is_opened = False
        self.bg_task_handler: Optional[BgTaskHandler] = None
        self.bg_task: Optional[asyncio.Task[Any]] = None
        self.db_instance_num = db_instance_num
        self.db_id = db_id
        self.scan_keynum_exit = False

    def _instance_for(self, key: bytes) -> _Instance:
        instance_id = self.slot_indexer.get_instance_id(key_to_slot_id(key))
        if instance_id >= len(self.insts):
            raise RuntimeError(f"storage instance {instance_id} is not open")
        return self.insts[instance_id]

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key``, overwriting any earlier value."""
        self._instance_for(key).set(key, value)

    def get(self, key: bytes) -> str:
        """Return the value stored under ``key``."""
        return self._instance_for(key).get(key)

    async def shutdown(self) -> None:
        """Stop the background worker and wait for it to finish."""
        if self.bg_task_handler is not None:
            await self.bg_task_handler.send(Shutdown())
        task, self.bg_task = self.bg_task, None
        if task is not None:
            try:
                await task
            except Exception:  # the worker's failure must not block shutdown
                log.exception("background worker failed")

    @staticmethod
    async def bg_task_worker(storage: Storage, receiver: BgTaskHandler) -> None:
        """Process tasks from ``receiver`` until a shutdown task arrives."""
        while True:
            task = await receiver.receive()
            if isinstance(task, CleanAll):
                log.info("Cleaning all for type: %s", task.dtype)
            elif isinstance(task, CompactRange):
                log.info(
                    "Compacting range: %s - %s for type: %s",
                    task.start,
                    task.end,
                    task.dtype,
                )
                if storage.insts:
                    compact = getattr(storage.insts[0], "compact_range", None)
                    if compact is not None:
                        compact(task.start, task.end)
            elif isinstance(task, Shutdown):
                log.info("BgTaskWorker received Shutdown, exiting...")
                break