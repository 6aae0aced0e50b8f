from __future__ import annotations

from typing import Any

import pytest
from conftest import FakeDeviceService

from battery_observer._observer.reader import BatteryReader
from battery_observer.exceptions import DeviceReadError
from battery_observer.models.outcome import ReadFailure, ReadSuccess


class _MappingDevice:
    def __init__(self, payload: Any) -> None:
        self.payload = payload

    async def get_info_with_retries(self, mac_address: str, max_retries: int, options: Any) -> Any:
        return self.payload


@pytest.mark.asyncio
async def test_present_level_is_success(device: FakeDeviceService) -> None:
    outcome = await BatteryReader(device).read("AA:BB:CC")

    assert outcome == ReadSuccess(mac_address="AA:BB:CC", battery_level="87")
    assert device.calls == [("AA:BB:CC", 2)]


@pytest.mark.asyncio
async def test_null_level_is_failure() -> None:
    device = FakeDeviceService(levels={"AA:BB:CC": None})

    outcome = await BatteryReader(device).read("AA:BB:CC")

    assert isinstance(outcome, ReadFailure)
    assert outcome.reason == "battery Level null"


@pytest.mark.asyncio
async def test_zero_level_is_still_success() -> None:
    device = FakeDeviceService(levels={"AA:BB:CC": 0})

    outcome = await BatteryReader(device).read("AA:BB:CC")

    assert outcome == ReadSuccess(mac_address="AA:BB:CC", battery_level=0)


@pytest.mark.asyncio
async def test_error_message_becomes_reason() -> None:
    device = FakeDeviceService(levels={"AA:BB:CC": DeviceReadError("Connection timed out", mac_address="AA:BB:CC")})

    outcome = await BatteryReader(device).read("AA:BB:CC")

    assert outcome == ReadFailure(mac_address="AA:BB:CC", reason="Connection timed out")


@pytest.mark.asyncio
async def test_error_without_message_uses_fallback_reason() -> None:
    device = FakeDeviceService(levels={"AA:BB:CC": RuntimeError()})

    outcome = await BatteryReader(device).read("AA:BB:CC")

    assert outcome == ReadFailure(mac_address="AA:BB:CC", reason="fail: no message")


@pytest.mark.asyncio
async def test_camel_case_mapping_result_is_accepted() -> None:
    reader = BatteryReader(_MappingDevice({"batteryLevel": "73", "temperature": 4.5}))

    outcome = await reader.read("AA:BB:CC")

    assert outcome == ReadSuccess(mac_address="AA:BB:CC", battery_level="73")


@pytest.mark.asyncio
async def test_empty_result_is_null_failure() -> None:
    outcome = await BatteryReader(_MappingDevice(None)).read("AA:BB:CC")

    assert outcome == ReadFailure(mac_address="AA:BB:CC", reason="battery Level null")


@pytest.mark.asyncio
async def test_explicit_retry_count_is_forwarded(device: FakeDeviceService) -> None:
    await BatteryReader(device, max_retries=5).read("AA:BB:CC")
    await BatteryReader(device).read("AA:BB:CC", max_retries=1)

    assert device.calls == [("AA:BB:CC", 5), ("AA:BB:CC", 1)]


@pytest.mark.asyncio
async def test_fractional_level_is_success() -> None:
    outcome = await BatteryReader(_MappingDevice({"batteryLevel": 87.5})).read("AA:BB:CC")

    assert outcome == ReadSuccess(mac_address="AA:BB:CC", battery_level=87.5)


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"batteryLevel": ["87"]}, 42])
async def test_unreadable_result_is_reported_separately_from_device_errors(payload: Any) -> None:
    outcome = await BatteryReader(_MappingDevice(payload)).read("AA:BB:CC")

    assert outcome == ReadFailure(mac_address="AA:BB:CC", reason="invalid device info")
