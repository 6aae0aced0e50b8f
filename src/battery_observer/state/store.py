"""In-memory observer state.

This is the only component allowed to mutate ``is_watching`` and
``updating_by_id``.  Each mutation is applied first and then published,
so a listener always sees the post-transition snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from battery_observer.models.outcome import ReadFailure, ReadOutcome, ReadSuccess
from battery_observer.state.events import ObserverEvent, ObserverEventType

_logger = logging.getLogger(__name__)

Listener = Callable[[ObserverEvent], None]


class ObserverSnapshot(BaseModel):
    """Read-only copy of the observer state at one instant."""

    model_config = ConfigDict(frozen=True)

    is_watching: bool = False
    updating_by_id: dict[str, bool] = Field(default_factory=dict)

    def is_updating(self, sensor_id: str) -> bool:
        return self.updating_by_id.get(sensor_id, False)


class ObserverStateStore:
    """Owned observer state with a narrow mutation API.

    ``set_watching`` belongs to the supervisor; ``begin_update``,
    ``end_update`` and ``publish_outcome`` belong to the serial worker.
    """

    def __init__(self) -> None:
        self._is_watching = False
        self._updating_by_id: dict[str, bool] = {}
        self._listeners: list[Listener] = []

    @property
    def is_watching(self) -> bool:
        return self._is_watching

    def is_updating(self, sensor_id: str) -> bool:
        return self._updating_by_id.get(sensor_id, False)

    def snapshot(self) -> ObserverSnapshot:
        return ObserverSnapshot(
            is_watching=self._is_watching,
            updating_by_id=dict(self._updating_by_id),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every published event.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_watching(self, watching: bool) -> None:
        if self._is_watching == watching:
            return
        self._is_watching = watching
        self._publish(
            ObserverEvent(type=ObserverEventType.WATCH_STARTED if watching else ObserverEventType.WATCH_STOPPED)
        )

    def begin_update(self, sensor_id: str) -> None:
        self._updating_by_id[sensor_id] = True
        self._publish(ObserverEvent(type=ObserverEventType.UPDATE_STARTED, sensor_id=sensor_id))

    def end_update(self, sensor_id: str) -> None:
        self._updating_by_id[sensor_id] = False
        self._publish(ObserverEvent(type=ObserverEventType.UPDATE_COMPLETED, sensor_id=sensor_id))

    def publish_outcome(self, outcome: ReadOutcome) -> None:
        if isinstance(outcome, ReadSuccess):
            event = ObserverEvent(
                type=ObserverEventType.UPDATE_SUCCEEDED,
                mac_address=outcome.mac_address,
                battery_level=outcome.battery_level,
            )
        elif isinstance(outcome, ReadFailure):
            event = ObserverEvent(
                type=ObserverEventType.UPDATE_FAILED,
                mac_address=outcome.mac_address,
                reason=outcome.reason,
            )
        else:
            raise TypeError(f"Unsupported read outcome: {outcome!r}")
        self._publish(event)

    def _publish(self, event: ObserverEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.debug("Observer event listener failed for %s", event.type, exc_info=True)
