"""Single serial consumer of the update queue.

Battery reads are serialized by construction: this worker is the only
caller of :meth:`BatteryReader.read` and handles one request at a time.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from battery_observer._constants import BATTERY_LEVEL_FIELD
from battery_observer._observer.gate import SensorGate
from battery_observer._observer.queue import UpdateQueue
from battery_observer._observer.reader import BatteryReader
from battery_observer.models.outcome import ReadSuccess
from battery_observer.models.requests import UpdateRequest
from battery_observer.protocols import SensorDirectory
from battery_observer.state.store import ObserverStateStore

_logger = logging.getLogger(__name__)


class SerialWorker:
    def __init__(
        self,
        *,
        queue: UpdateQueue,
        directory: SensorDirectory,
        gate: SensorGate,
        reader: BatteryReader,
        store: ObserverStateStore,
    ) -> None:
        self._queue = queue
        self._directory = directory
        self._gate = gate
        self._reader = reader
        self._store = store
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the consumption loop; a no-op if it is already running."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run(), name="battery-observer-worker")

    async def aclose(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def join(self) -> None:
        """Wait until every request queued so far has been processed."""
        await self._queue.join()

    async def run(self) -> None:
        while True:
            request = await self._queue.get()
            try:
                await self.process(request)
            except Exception:
                _logger.warning("Battery update for sensor %s failed unexpectedly", request.sensor_id, exc_info=True)
            finally:
                self._queue.task_done()

    async def process(self, request: UpdateRequest) -> None:
        """Handle one request to completion."""
        sensor_id = request.sensor_id
        try:
            sensor = await self._directory.get_by_id(sensor_id)
        except Exception:
            _logger.debug("Dropping update for unresolvable sensor %s", sensor_id, exc_info=True)
            return

        if self._gate.is_busy(sensor_id):
            # Not requeued; the next poll tick produces a fresh request.
            _logger.debug("Skipping battery update for busy sensor %s", sensor_id)
            return

        mac_address = sensor.mac_address
        self._store.begin_update(sensor_id)
        try:
            outcome = await self._reader.read(mac_address)
            if isinstance(outcome, ReadSuccess):
                await self._persist_level(sensor_id, outcome.battery_level)
            self._store.publish_outcome(outcome)
        finally:
            self._store.end_update(sensor_id)

    async def _persist_level(self, sensor_id: str, battery_level: str | int | float) -> None:
        try:
            await self._directory.update(sensor_id, BATTERY_LEVEL_FIELD, battery_level)
        except Exception:
            _logger.debug("Persisting battery level for sensor %s failed", sensor_id, exc_info=True)
