"""Sensor and device-info records."""

from __future__ import annotations

from pydantic import Field, field_validator

from battery_observer.models._base import ObserverBaseModel


class Sensor(ObserverBaseModel):
    """A tracked wireless sensor.

    ``id`` is the stable internal identity; ``mac_address`` is what the
    device transport talks to.
    """

    id: str = Field(..., description="Internal sensor id")
    mac_address: str = Field(..., description="Device-facing MAC address")

    @field_validator("id", "mac_address")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must be non-empty")
        return stripped


class DeviceInfo(ObserverBaseModel):
    """Result of a device info read.

    ``battery_level`` is ``None`` when every attempt completed without
    obtaining a reading.
    """

    battery_level: str | int | float | None = None
