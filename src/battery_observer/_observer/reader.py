"""Bounded-retry battery read against the device service."""

from __future__ import annotations

import logging

from battery_observer._constants import (
    BATTERY_LEVEL_NULL_REASON,
    INFO_RETRIES,
    INVALID_DEVICE_INFO_REASON,
    NO_MESSAGE_REASON,
)
from battery_observer.models.outcome import ReadFailure, ReadOutcome, ReadSuccess
from battery_observer.models.sensor import DeviceInfo
from battery_observer.protocols import DeviceService

_logger = logging.getLogger(__name__)


def _error_reason(error: BaseException) -> str:
    """Failure reason for *error*, tolerating errors without a message."""
    message = str(error).strip()
    return message or NO_MESSAGE_REASON


class BatteryReader:
    """Read one device's battery level and report a typed outcome.

    Retrying is delegated to the device service; this class only
    translates its result (or error) into a :data:`ReadOutcome`.
    Nothing but cancellation escapes :meth:`read`.
    """

    def __init__(self, device: DeviceService, *, max_retries: int = INFO_RETRIES) -> None:
        self._device = device
        self._max_retries = max_retries

    async def read(self, mac_address: str, max_retries: int | None = None) -> ReadOutcome:
        retries = self._max_retries if max_retries is None else max_retries
        try:
            raw = await self._device.get_info_with_retries(mac_address, retries, None)
        except Exception as exc:
            _logger.debug("Battery read failed mac=%s", mac_address, exc_info=True)
            return ReadFailure(mac_address=mac_address, reason=_error_reason(exc))

        try:
            info = raw if isinstance(raw, DeviceInfo) else DeviceInfo.model_validate(dict(raw or {}))
        except (TypeError, ValueError):
            _logger.debug("Unreadable device info mac=%s raw=%r", mac_address, raw, exc_info=True)
            return ReadFailure(mac_address=mac_address, reason=INVALID_DEVICE_INFO_REASON)

        if info.battery_level is None:
            return ReadFailure(mac_address=mac_address, reason=BATTERY_LEVEL_NULL_REASON)

        _logger.debug("Battery level mac=%s level=%s", mac_address, info.battery_level)
        return ReadSuccess(mac_address=mac_address, battery_level=info.battery_level)
