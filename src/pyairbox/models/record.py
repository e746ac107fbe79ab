"""Per-device record persisted in the record store."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from pyairbox.models._base import AirboxBaseModel
from pyairbox.models.feed import TelemetryFeed


class DeviceRecord(AirboxBaseModel):
    """Stored state of one device, keyed and partitioned by its id.

    Parameters
    ----------
    id : str
        Device identifier.
    partition_key : str
        Always equal to ``id``. Filled from ``id`` when omitted.
    feed : TelemetryFeed or None
        Last successfully decoded feed (``airbox`` in the document).
        ``None`` until the first good fetch and after a corrupt one.
    display_name : str
        Site name derived from the feed (``siteName``).
    corrupt : bool
        ``True`` when the last fetched payload could not be decoded
        (``jsonIsBroken``).
    """

    id: str
    partition_key: str = Field(default="", alias="partitionKey")
    feed: TelemetryFeed | None = Field(default=None, alias="airbox")
    display_name: str = Field(default="", alias="siteName")
    corrupt: bool = Field(default=False, alias="jsonIsBroken")

    @model_validator(mode="before")
    @classmethod
    def _default_partition_key(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if values.get("partitionKey") or values.get("partition_key"):
            return values
        merged = dict(values)
        merged["partitionKey"] = values.get("id")
        return merged

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        if not value:
            raise ValueError("id must be non-empty")
        return value

    @model_validator(mode="after")
    def _check_partition_key(self) -> DeviceRecord:
        if self.partition_key != self.id:
            raise ValueError(f"partitionKey {self.partition_key!r} does not match id {self.id!r}")
        return self

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> DeviceRecord:
        """Parse a stored document (store metadata keys are ignored)."""
        return cls.model_validate(document)
