"""Custom exception hierarchy for battery_observer."""

from __future__ import annotations


class ObserverError(Exception):
    """Base exception for all battery_observer errors."""


class ObserverConfigError(ObserverError):
    """Invalid or missing configuration."""


class ObserverNotRunningError(ObserverError):
    """A command was issued outside of the observer's running context."""


class SensorNotFoundError(ObserverError):
    """A sensor id can no longer be resolved by the sensor directory.

    Directory implementations raise this from ``get_by_id``.  The serial
    worker treats it as a stale reference and drops the request.
    """

    def __init__(self, sensor_id: str) -> None:
        self.sensor_id = sensor_id
        super().__init__(f"Unknown sensor: {sensor_id}")


class DirectoryUnavailableError(ObserverError):
    """The sensor directory could not list its sensors."""


class DeviceReadError(ObserverError):
    """Device communication failed (connect, discovery, or characteristic read)."""

    def __init__(self, message: str = "", *, mac_address: str = "") -> None:
        self.mac_address = mac_address
        super().__init__(message)
