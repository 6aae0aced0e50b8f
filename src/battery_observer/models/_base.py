"""Base model for records exchanged with collaborators.

Every collaborator-facing model inherits from :class:`ObserverBaseModel`
which provides:

* ``alias_generator=to_camel`` so camelCase registry keys
  (``macAddress``, ``batteryLevel``) map to snake_case fields.
* ``populate_by_name`` so Python callers can use the field names.
* Frozen instances: records are read, never mutated, by the core.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ObserverBaseModel(BaseModel):
    """Base for collaborator records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
