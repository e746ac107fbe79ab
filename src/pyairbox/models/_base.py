"""Base model for telemetry payloads and stored documents.

Every pyairbox model inherits from :class:`AirboxBaseModel` which
provides:

* Frozen instances; reconciliation builds new records, it never
  mutates the previous one.
* ``populate_by_name=True`` so models accept both the wire/document
  key (``siteName``) and the Python field name (``site_name``).
* A ``model_validator(mode="before")`` that drops ``null`` values and
  Cosmos system keys so the field default is used instead.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from pyairbox._constants import COSMOS_SYSTEM_KEYS


class AirboxBaseModel(BaseModel):
    """Base for pyairbox models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        """Drop ``None`` values and Cosmos bookkeeping keys from *values*."""
        return {key: value for key, value in values.items() if value is not None and key not in COSMOS_SYSTEM_KEYS}

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return AirboxBaseModel._clean_dict(values)

    def to_document(self) -> dict[str, Any]:
        """Serialize with wire/document aliases into JSON-ready types."""
        return self.model_dump(mode="json", by_alias=True)
