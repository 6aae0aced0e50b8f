"""Typed result of one battery read."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class ReadSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    mac_address: str
    battery_level: str | int | float


class ReadFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    mac_address: str
    reason: str


ReadOutcome = Annotated[ReadSuccess | ReadFailure, Field(discriminator="kind")]
"""Either a :class:`ReadSuccess` or a :class:`ReadFailure`."""
