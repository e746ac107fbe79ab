"""Data models for telemetry feeds and stored documents."""

from pyairbox.models._base import AirboxBaseModel
from pyairbox.models.directory import DeviceDirectory
from pyairbox.models.feed import FeedEntry, Reading, TelemetryFeed
from pyairbox.models.record import DeviceRecord

__all__ = [
    "AirboxBaseModel",
    "DeviceDirectory",
    "DeviceRecord",
    "FeedEntry",
    "Reading",
    "TelemetryFeed",
]
