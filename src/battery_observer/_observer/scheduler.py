"""Periodic poll cycle that fans sensors out into the update queue."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from battery_observer._constants import DEFAULT_POLL_INTERVAL
from battery_observer._observer.queue import UpdateQueue
from battery_observer.models.requests import UpdateRequest
from battery_observer.protocols import SensorDirectory

_logger = logging.getLogger(__name__)


class PollScheduler:
    """Run ``enqueue_all_sensors`` then wait ``interval`` seconds, forever.

    Each cycle owns a stop event.  :meth:`stop` sets it, which resolves
    the current delay early; the loop then exits before its next fetch.
    A tick already in progress is allowed to finish.
    """

    def __init__(
        self,
        *,
        directory: SensorDirectory,
        queue: UpdateQueue,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._directory = directory
        self._queue = queue
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._stop_event: asyncio.Event | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        """Whether a cycle is active and has not been asked to stop."""
        return (
            self._task is not None
            and not self._task.done()
            and self._stop_event is not None
            and not self._stop_event.is_set()
        )

    def start(self) -> bool:
        """Start a cycle. Returns ``False`` if one is already active."""
        if self.is_running:
            return False
        stop_event = asyncio.Event()
        previous = self._task
        self._stop_event = stop_event
        self._task = asyncio.get_running_loop().create_task(
            self._run(stop_event, previous),
            name="battery-observer-poll",
        )
        self._tasks.add(self._task)
        self._task.add_done_callback(self._tasks.discard)
        return True

    def stop(self) -> bool:
        """Ask the active cycle to exit at its next suspension point."""
        if not self.is_running:
            return False
        assert self._stop_event is not None  # noqa: S101
        self._stop_event.set()
        return True

    async def aclose(self) -> None:
        """Stop and cancel every cycle, including a stopped one still finishing its tick."""
        if self._stop_event is not None:
            self._stop_event.set()
        self._task = None
        tasks = [task for task in self._tasks if not task.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def enqueue_all_sensors(self) -> int:
        """Enqueue one update request per known sensor, in directory order.

        A failing directory fetch abandons the tick: nothing is enqueued
        and nothing is raised.
        """
        try:
            sensors = await self._directory.get_all()
            requests = [UpdateRequest(sensor_id=sensor.id) for sensor in sensors]
        except Exception:
            _logger.debug("Sensor directory fetch failed; skipping poll tick", exc_info=True)
            return 0
        count = self._queue.put_many(requests)
        _logger.debug("Poll tick enqueued %d battery updates", count)
        return count

    async def _run(self, stop_event: asyncio.Event, previous: asyncio.Task[None] | None) -> None:
        if previous is not None and not previous.done():
            # A stopped cycle may still be finishing its tick.
            await asyncio.wait([previous])
        while not stop_event.is_set():
            await self.enqueue_all_sensors()
            if await self._wait_for_stop(stop_event):
                break
        _logger.debug("Poll cycle exited")

    async def _wait_for_stop(self, stop_event: asyncio.Event) -> bool:
        try:
            await asyncio.wait_for(stop_event.wait(), self._interval)
        except TimeoutError:
            return False
        return True
