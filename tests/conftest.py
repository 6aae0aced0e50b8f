from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from battery_observer.exceptions import DirectoryUnavailableError, SensorNotFoundError
from battery_observer.models.sensor import DeviceInfo, Sensor
from battery_observer.state.events import ObserverEvent


@dataclass
class FakeSensorDirectory:
    sensors: list[Sensor] = field(default_factory=list)
    fail_get_all: bool = False
    fail_update: bool = False
    calls: dict[str, int] = field(default_factory=dict)
    updates: list[tuple[str, str, Any]] = field(default_factory=list)

    def _record_call(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    async def get_all(self) -> Sequence[Sensor]:
        self._record_call("get_all")
        await asyncio.sleep(0)
        if self.fail_get_all:
            raise DirectoryUnavailableError("sensor table unavailable")
        return list(self.sensors)

    async def get_by_id(self, sensor_id: str) -> Sensor:
        self._record_call("get_by_id")
        for sensor in self.sensors:
            if sensor.id == sensor_id:
                return sensor
        raise SensorNotFoundError(sensor_id)

    async def update(self, sensor_id: str, field_name: str, value: Any) -> None:
        self._record_call("update")
        if self.fail_update:
            raise RuntimeError("write failed")
        self.updates.append((sensor_id, field_name, value))


@dataclass
class FakeDeviceService:
    """Device double; values in ``levels`` may be a level, ``None`` or an exception."""

    levels: dict[str, Any] = field(default_factory=dict)
    delay: float = 0.0
    calls: list[tuple[str, int]] = field(default_factory=list)
    in_flight: int = 0
    max_in_flight: int = 0

    async def get_info_with_retries(self, mac_address: str, max_retries: int, options: Any) -> DeviceInfo:
        self.calls.append((mac_address, max_retries))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            value = self.levels.get(mac_address)
            if isinstance(value, BaseException):
                raise value
            return DeviceInfo(battery_level=value)
        finally:
            self.in_flight -= 1


@dataclass
class FakeActivityGuard:
    busy: set[str] = field(default_factory=set)

    def is_busy(self, sensor_id: str) -> bool:
        return sensor_id in self.busy


@dataclass
class EventRecorder:
    events: list[ObserverEvent] = field(default_factory=list)

    def __call__(self, event: ObserverEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [event.type.value for event in self.events]


@pytest.fixture
def sensors() -> list[Sensor]:
    return [
        Sensor(id="sensor-1", mac_address="AA:BB:CC"),
        Sensor(id="sensor-2", mac_address="DD:EE:FF"),
        Sensor(id="sensor-3", mac_address="11:22:33"),
    ]


@pytest.fixture
def directory(sensors: list[Sensor]) -> FakeSensorDirectory:
    return FakeSensorDirectory(sensors=sensors)


@pytest.fixture
def device() -> FakeDeviceService:
    return FakeDeviceService(levels={"AA:BB:CC": "87", "DD:EE:FF": "54", "11:22:33": "12"})


@pytest.fixture
def guard() -> FakeActivityGuard:
    return FakeActivityGuard()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()
