"""Shared constants for battery_observer."""

from __future__ import annotations

#: Seconds between two poll ticks (ten minutes).
DEFAULT_POLL_INTERVAL: float = 10 * 60

#: Attempts the device service makes before giving up on one read.
INFO_RETRIES: int = 2

#: Sensor field the fresh reading is written back to.
BATTERY_LEVEL_FIELD = "batteryLevel"

#: Failure reason when the read finished without a level.
BATTERY_LEVEL_NULL_REASON = "battery Level null"

#: Failure reason when the device call raised an error without a message.
NO_MESSAGE_REASON = "fail: no message"

#: Failure reason when the device returned a result that is not device info.
INVALID_DEVICE_INFO_REASON = "invalid device info"

DEFAULT_MQTT_TOPIC = "battery-observer"
DEFAULT_MQTT_CLIENT_ID = "battery-observer"
