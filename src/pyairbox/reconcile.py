"""Per-device reconciliation.

One invocation fetches the device's latest payload, looks up its stored
record, decodes the payload and performs exactly one store write:

* decoded, record exists → ``replace``
* decoded, no record → ``create``
* not decodable → corrupt record, ``replace`` or ``create`` depending on
  whether a record exists (upsert)

A transport failure ends the invocation before any write. Errors are
contained to the device and reported, with the stage they hit, through the
log and the returned :class:`ReconcileResult`. Only cancellation escapes.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

from pyairbox._api.feed import fetch_raw_feed
from pyairbox._transport import Transport
from pyairbox.config import AirboxConfig
from pyairbox.exceptions import (
    AirboxConflictError,
    AirboxDecodeError,
    AirboxStoreError,
    AirboxTransportError,
)
from pyairbox.ingestion.parse import parse_feed
from pyairbox.models.feed import TelemetryFeed
from pyairbox.models.record import DeviceRecord
from pyairbox.store.base import RecordStore

_logger = logging.getLogger(__name__)


class SyncOutcome(StrEnum):
    UPDATED = "updated"
    CREATED = "created"
    CORRUPT = "corrupt"
    FAILED = "failed"


class SyncStage(StrEnum):
    FETCH = "fetch"
    LOOKUP = "lookup"
    WRITE = "write"


class StoreOperation(StrEnum):
    CREATE = "create"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """What one reconciliation did for one device."""

    device_id: str
    outcome: SyncOutcome
    record: DeviceRecord | None = None
    operation: StoreOperation | None = None
    stage: SyncStage | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.outcome != SyncOutcome.FAILED


def derive_display_name(feed: TelemetryFeed, existing: DeviceRecord | None) -> str:
    """Display name for a freshly decoded feed.

    The first reading's name always wins. With no readings, an existing
    record keeps its display name and a new record gets ``""``.
    """
    readings = feed.readings
    if readings:
        return readings[0].name
    if existing is not None:
        return existing.display_name
    return ""


def build_record(device_id: str, feed: TelemetryFeed, existing: DeviceRecord | None) -> DeviceRecord:
    return DeviceRecord(
        id=device_id,
        feed=feed,
        display_name=derive_display_name(feed, existing),
        corrupt=False,
    )


def build_corrupt_record(device_id: str) -> DeviceRecord:
    """Corrupt marker; previous feed and display name are not carried over."""
    return DeviceRecord(id=device_id, feed=None, display_name="", corrupt=True)


class Reconciler:
    """Runs the fetch → lookup → decode → write cycle for single devices."""

    def __init__(self, config: AirboxConfig, transport: Transport, store: RecordStore) -> None:
        self._config = config
        self._transport = transport
        self._store = store

    async def reconcile(self, device_id: str) -> ReconcileResult:
        try:
            raw = await fetch_raw_feed(self._config, self._transport, device_id)
        except AirboxTransportError as exc:
            _logger.error("Fetch failed for %s, record left untouched: %s", device_id, exc)
            return self._failed(device_id, SyncStage.FETCH, exc)
        except Exception as exc:
            return self._unexpected(device_id, SyncStage.FETCH, exc)

        try:
            existing = await self._store.get(device_id)
        except AirboxStoreError as exc:
            _logger.error("Lookup failed for %s: %s", device_id, exc)
            return self._failed(device_id, SyncStage.LOOKUP, exc)
        except Exception as exc:
            return self._unexpected(device_id, SyncStage.LOOKUP, exc)

        try:
            feed = parse_feed(raw, device_id=device_id)
        except AirboxDecodeError as exc:
            _logger.warning("Feed for %s is corrupt: %s", device_id, exc)
            record = build_corrupt_record(device_id)
            outcome = SyncOutcome.CORRUPT
        else:
            record = build_record(device_id, feed, existing)
            outcome = SyncOutcome.UPDATED if existing is not None else SyncOutcome.CREATED

        if existing is not None:
            operation = StoreOperation.REPLACE
            write: Callable[[str, DeviceRecord], Awaitable[DeviceRecord]] = self._store.replace
        else:
            operation = StoreOperation.CREATE
            write = self._store.create

        try:
            committed = await write(device_id, record)
        except AirboxConflictError as exc:
            _logger.warning("Record for %s was created concurrently, not retrying: %s", device_id, exc)
            return self._failed(device_id, SyncStage.WRITE, exc, operation=operation)
        except AirboxStoreError as exc:
            _logger.error("%s failed for %s: %s", operation.value.capitalize(), device_id, exc)
            return self._failed(device_id, SyncStage.WRITE, exc, operation=operation)
        except Exception as exc:
            return self._unexpected(device_id, SyncStage.WRITE, exc, operation=operation)

        _logger.info("Record %s %s (%s)", device_id, outcome.value, operation.value)
        return ReconcileResult(
            device_id=device_id,
            outcome=outcome,
            record=committed,
            operation=operation,
        )

    @classmethod
    def _unexpected(
        cls,
        device_id: str,
        stage: SyncStage,
        error: Exception,
        *,
        operation: StoreOperation | None = None,
    ) -> ReconcileResult:
        _logger.exception("Unexpected error during %s for %s", stage.value, device_id)
        return cls._failed(device_id, stage, error, operation=operation)

    @staticmethod
    def _failed(
        device_id: str,
        stage: SyncStage,
        error: Exception,
        *,
        operation: StoreOperation | None = None,
    ) -> ReconcileResult:
        return ReconcileResult(
            device_id=device_id,
            outcome=SyncOutcome.FAILED,
            operation=operation,
            stage=stage,
            error=error,
        )
