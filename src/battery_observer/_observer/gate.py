"""Busy-sensor gate consulted before every battery read."""

from __future__ import annotations

from battery_observer.protocols import ActivityGuard


class SensorGate:
    """Read-only predicate: is this sensor busy with an exclusive activity?"""

    def __init__(self, guard: ActivityGuard) -> None:
        self._guard = guard

    def is_busy(self, sensor_id: str) -> bool:
        return bool(self._guard.is_busy(sensor_id))
