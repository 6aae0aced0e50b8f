"""Data models for sensors, work items and read outcomes."""

from battery_observer.models._base import ObserverBaseModel
from battery_observer.models.outcome import ReadFailure, ReadOutcome, ReadSuccess
from battery_observer.models.requests import UpdateRequest
from battery_observer.models.sensor import DeviceInfo, Sensor

__all__ = [
    "DeviceInfo",
    "ObserverBaseModel",
    "ReadFailure",
    "ReadOutcome",
    "ReadSuccess",
    "Sensor",
    "UpdateRequest",
]
