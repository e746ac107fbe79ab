"""Telemetry feed models for the LASS latest-reading endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from pyairbox.ingestion.normalize import safe_float
from pyairbox.models._base import AirboxBaseModel


class Reading(AirboxBaseModel):
    """One AirBox sample.

    Only :attr:`name` is interpreted by the sync engine; every other field
    is carried into the stored record as received.

    Parameters
    ----------
    timestamp : datetime or None
        Sample time reported by the device.
    site_name : str or None
        Site label reported by the device (``siteName``).
    area : str or None
        Area label.
    device_id_echo : str or None
        Device id echoed inside the reading (``device_ID``).
    name : str
        Human-readable site name; becomes the record's display name.
    s_d1 : float or None
        PM2.5 concentration.
    s_h0 : float or None
        Relative humidity.
    s_t0 : float or None
        Temperature.
    """

    timestamp: datetime | None = None
    site_name: str | None = Field(default=None, alias="siteName")
    area: str | None = None
    device_id_echo: str | None = Field(default=None, alias="device_ID")
    name: str = ""
    s_d1: float | None = None
    s_h0: float | None = None
    s_t0: float | None = None

    @field_validator("s_d1", "s_h0", "s_t0", mode="before")
    @classmethod
    def _coerce_channels(cls, value: Any) -> float | None:
        return safe_float(value)


class FeedEntry(AirboxBaseModel):
    """Element of ``feeds``; wraps the reading under an ``AirBox`` key."""

    airbox: Reading | None = Field(default=None, alias="AirBox")


class TelemetryFeed(AirboxBaseModel):
    """Latest-reading payload for one device.

    ``device_id`` and ``source`` are provenance strings copied from the
    payload; they are not checked against the requested identifier.
    """

    device_id: str = ""
    source: str = ""
    feeds: list[FeedEntry] = Field(default_factory=list)

    @property
    def readings(self) -> list[Reading]:
        """Readings in payload order, skipping entries without an AirBox sample."""
        return [entry.airbox for entry in self.feeds if entry.airbox is not None]
