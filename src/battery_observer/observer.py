"""High-level battery observer: the public control surface."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from battery_observer._mqtt import MqttEventPublisher
from battery_observer._observer.gate import SensorGate
from battery_observer._observer.queue import UpdateQueue
from battery_observer._observer.reader import BatteryReader
from battery_observer._observer.scheduler import PollScheduler
from battery_observer._observer.worker import SerialWorker
from battery_observer.config import ObserverConfig
from battery_observer.exceptions import ObserverNotRunningError
from battery_observer.models.requests import UpdateRequest
from battery_observer.protocols import ActivityGuard, DeviceService, SensorDirectory
from battery_observer.state.events import ObserverEvent
from battery_observer.state.store import ObserverSnapshot, ObserverStateStore

_logger = logging.getLogger(__name__)


class BatteryObserver:
    """Keeps the battery level of every known sensor fresh.

    Usage::

        async with BatteryObserver(directory, device, guard) as observer:
            observer.start()
            observer.request_update("sensor-1")

    The serial worker runs for as long as the context is open, whether
    or not polling is active.  ``start``/``stop`` only toggle the poll
    cycle (``Idle -> Watching -> Idle``).
    """

    def __init__(
        self,
        directory: SensorDirectory,
        device: DeviceService,
        guard: ActivityGuard,
        *,
        config: ObserverConfig | None = None,
        store: ObserverStateStore | None = None,
    ) -> None:
        self._config = config or ObserverConfig()
        self._store = store or ObserverStateStore()
        self._queue = UpdateQueue()
        self._scheduler = PollScheduler(
            directory=directory,
            queue=self._queue,
            interval=self._config.poll_interval,
        )
        self._worker = SerialWorker(
            queue=self._queue,
            directory=directory,
            gate=SensorGate(guard),
            reader=BatteryReader(device, max_retries=self._config.info_retries),
            store=self._store,
        )
        self._publisher: MqttEventPublisher | None = None
        self._unsubscribe_publisher: Callable[[], None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BatteryObserver:
        self._loop = asyncio.get_running_loop()
        await self._ensure_mqtt_started()
        self._worker.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()
        await self._scheduler.aclose()
        await self._worker.aclose()
        await self._stop_mqtt()
        self._loop = None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin polling. Ignored (returns ``False``) while already watching."""
        self._require_running()
        if self._store.is_watching:
            _logger.debug("Battery observer already watching; start ignored")
            return False
        self._store.set_watching(True)
        self._scheduler.start()
        _logger.debug("Battery observer started interval=%ss", self._scheduler.interval)
        return True

    def stop(self) -> bool:
        """Stop polling. Queued requests and an in-flight read are unaffected."""
        if not self._store.is_watching:
            return False
        self._store.set_watching(False)
        self._scheduler.stop()
        _logger.debug("Battery observer stopped; %d updates still queued", self._queue.qsize())
        return True

    def request_update(self, sensor_id: str) -> None:
        """Queue a battery update for one sensor, independent of polling."""
        self._require_running()
        self._queue.put(UpdateRequest(sensor_id=sensor_id))

    async def enqueue_all_sensors(self) -> int:
        """Run one poll tick immediately, outside of the periodic cycle."""
        self._require_running()
        return await self._scheduler.enqueue_all_sensors()

    async def wait_idle(self) -> None:
        """Wait until every request queued so far has been processed."""
        await self._worker.join()

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def config(self) -> ObserverConfig:
        return self._config

    @property
    def state(self) -> ObserverStateStore:
        return self._store

    @property
    def is_watching(self) -> bool:
        return self._store.is_watching

    @property
    def pending_updates(self) -> int:
        return self._queue.qsize()

    def snapshot(self) -> ObserverSnapshot:
        return self._store.snapshot()

    def subscribe(self, listener: Callable[[ObserverEvent], None]) -> Callable[[], None]:
        return self._store.subscribe(listener)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_running(self) -> None:
        if self._loop is None:
            raise ObserverNotRunningError(
                "Observer not running. Use 'async with BatteryObserver(...) as observer:'"
            )

    async def _ensure_mqtt_started(self) -> None:
        if not self._config.mqtt_enabled or self._loop is None:
            return
        publisher = MqttEventPublisher(self._config, logger=_logger)
        try:
            await self._loop.run_in_executor(None, publisher.start)
        except Exception:
            _logger.debug("MQTT publisher start failed", exc_info=True)
            return
        self._publisher = publisher
        self._unsubscribe_publisher = self._store.subscribe(publisher.publish)

    async def _stop_mqtt(self) -> None:
        if self._unsubscribe_publisher is not None:
            self._unsubscribe_publisher()
            self._unsubscribe_publisher = None
        publisher = self._publisher
        self._publisher = None
        if publisher is None or self._loop is None:
            return
        try:
            await self._loop.run_in_executor(None, publisher.stop)
        except Exception:
            _logger.debug("MQTT publisher stop failed", exc_info=True)
