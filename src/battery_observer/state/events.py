"""Events published by the observer core.

The worker and supervisor request state transitions through the store;
the store applies them and then publishes one of these events.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ObserverEventType(StrEnum):
    WATCH_STARTED = "watch_started"
    WATCH_STOPPED = "watch_stopped"
    UPDATE_STARTED = "update_started"
    UPDATE_COMPLETED = "update_completed"
    UPDATE_SUCCEEDED = "update_succeeded"
    UPDATE_FAILED = "update_failed"


class ObserverEvent(BaseModel):
    """A state transition or read outcome reported by the observer."""

    model_config = ConfigDict(frozen=True)

    type: ObserverEventType
    sensor_id: str | None = Field(default=None, description="Set for update_started/update_completed")
    mac_address: str | None = Field(default=None, description="Set for update_succeeded/update_failed")
    battery_level: str | int | float | None = None
    reason: str | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
