"""Unbounded FIFO of pending update requests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from battery_observer.models.requests import UpdateRequest


class UpdateQueue:
    """Multi-producer/single-consumer queue of :class:`UpdateRequest`.

    Unbounded, so ``put`` never blocks and never drops.  No
    deduplication: repeated sensor ids are delivered once per put.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[UpdateRequest] = asyncio.Queue()

    def put(self, request: UpdateRequest) -> None:
        self._queue.put_nowait(request)

    def put_many(self, requests: Iterable[UpdateRequest]) -> int:
        count = 0
        for request in requests:
            self._queue.put_nowait(request)
            count += 1
        return count

    async def get(self) -> UpdateRequest:
        return await self._queue.get()

    def task_done(self) -> None:
        self._queue.task_done()

    async def join(self) -> None:
        """Wait until every queued request has been marked done."""
        await self._queue.join()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()
