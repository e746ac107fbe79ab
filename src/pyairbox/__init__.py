"""pyairbox - Async sync engine for AirBox telemetry records."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyairbox")
except PackageNotFoundError:
    __version__ = "0+local"
from pyairbox.client import AirboxClient
from pyairbox.config import AirboxConfig
from pyairbox.exceptions import (
    AirboxConfigError,
    AirboxConflictError,
    AirboxDecodeError,
    AirboxError,
    AirboxRecordMissingError,
    AirboxStoreError,
    AirboxTransportError,
)
from pyairbox.ingestion.parse import parse_feed
from pyairbox.models import DeviceDirectory, DeviceRecord, FeedEntry, Reading, TelemetryFeed
from pyairbox.reconcile import ReconcileResult, Reconciler, StoreOperation, SyncOutcome, SyncStage
from pyairbox.store import DirectorySource, InMemoryDirectorySource, InMemoryRecordStore, RecordStore
from pyairbox.sync import SyncDriver, SyncPass

__all__ = [
    "__version__",
    "AirboxClient",
    "AirboxConfig",
    "AirboxConfigError",
    "AirboxConflictError",
    "AirboxDecodeError",
    "AirboxError",
    "AirboxRecordMissingError",
    "AirboxStoreError",
    "AirboxTransportError",
    "DeviceDirectory",
    "DeviceRecord",
    "DirectorySource",
    "FeedEntry",
    "InMemoryDirectorySource",
    "InMemoryRecordStore",
    "Reading",
    "ReconcileResult",
    "Reconciler",
    "RecordStore",
    "StoreOperation",
    "SyncDriver",
    "SyncOutcome",
    "SyncPass",
    "SyncStage",
    "TelemetryFeed",
    "parse_feed",
]
