"""battery_observer - Async orchestrator keeping sensor battery levels fresh."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("battery-observer")
except PackageNotFoundError:
    __version__ = "0+local"
from battery_observer.config import ObserverConfig
from battery_observer.exceptions import (
    DeviceReadError,
    DirectoryUnavailableError,
    ObserverConfigError,
    ObserverError,
    ObserverNotRunningError,
    SensorNotFoundError,
)
from battery_observer.models import (
    DeviceInfo,
    ReadFailure,
    ReadOutcome,
    ReadSuccess,
    Sensor,
    UpdateRequest,
)
from battery_observer.observer import BatteryObserver
from battery_observer.protocols import ActivityGuard, DeviceService, SensorDirectory
from battery_observer.state.events import ObserverEvent, ObserverEventType
from battery_observer.state.store import ObserverSnapshot, ObserverStateStore

__all__ = [
    "__version__",
    "ActivityGuard",
    "BatteryObserver",
    "DeviceInfo",
    "DeviceReadError",
    "DeviceService",
    "DirectoryUnavailableError",
    "ObserverConfig",
    "ObserverConfigError",
    "ObserverError",
    "ObserverEvent",
    "ObserverEventType",
    "ObserverNotRunningError",
    "ObserverSnapshot",
    "ObserverStateStore",
    "ReadFailure",
    "ReadOutcome",
    "ReadSuccess",
    "Sensor",
    "SensorDirectory",
    "SensorNotFoundError",
    "UpdateRequest",
]
