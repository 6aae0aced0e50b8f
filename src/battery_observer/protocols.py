"""Structural interfaces of the observer's external collaborators.

The observer never talks to Bluetooth, storage or the download
subsystem directly.  Anything matching these protocols can be plugged
in, which also keeps test doubles trivial.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from battery_observer.models.sensor import DeviceInfo, Sensor


class SensorDirectory(Protocol):
    """Registry of known sensors."""

    async def get_all(self) -> Sequence[Sensor]:
        """Return every known sensor, in directory order."""
        ...

    async def get_by_id(self, sensor_id: str) -> Sensor:
        """Return one sensor; raise (e.g. ``SensorNotFoundError``) if unknown."""
        ...

    async def update(self, sensor_id: str, field: str, value: Any) -> None:
        """Persist one field of a sensor."""
        ...


class DeviceService(Protocol):
    """Device communication layer (Bluetooth transport)."""

    async def get_info_with_retries(
        self,
        mac_address: str,
        max_retries: int,
        options: Mapping[str, Any] | None,
    ) -> DeviceInfo | Mapping[str, Any]:
        ...


class ActivityGuard(Protocol):
    """Download-state lookup."""

    def is_busy(self, sensor_id: str) -> bool:
        """Whether *sensor_id* is currently engaged in a data download."""
        ...
