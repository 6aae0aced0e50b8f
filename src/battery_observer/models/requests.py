"""Work items accepted by the update queue."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class UpdateRequest(BaseModel):
    """Request to refresh the battery level of one sensor."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    sensor_id: str

    @field_validator("sensor_id")
    @classmethod
    def _sensor_id_non_empty(cls, value: str) -> str:
        sensor_id = value.strip()
        if not sensor_id:
            raise ValueError("sensor_id must be non-empty")
        return sensor_id
