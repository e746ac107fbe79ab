"""In-memory record store.

Keeps serialized documents rather than model instances so reads and
writes go through the same document round trip as the Cosmos store.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from pyairbox.exceptions import AirboxConflictError, AirboxRecordMissingError
from pyairbox.models.directory import DeviceDirectory
from pyairbox.models.record import DeviceRecord
from pyairbox.store.base import check_partition


class InMemoryRecordStore:
    """Dict-backed :class:`~pyairbox.store.base.RecordStore`.

    Each operation yields to the event loop once before touching the
    partition, then completes without suspending, so every operation is
    atomic per partition while concurrent invocations still interleave.
    """

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self._documents: dict[str, dict[str, Any]] = copy.deepcopy(documents) if documents else {}

    async def get(self, device_id: str) -> DeviceRecord | None:
        await asyncio.sleep(0)
        document = self._documents.get(device_id)
        if document is None:
            return None
        return DeviceRecord.from_document(copy.deepcopy(document))

    async def replace(self, device_id: str, record: DeviceRecord) -> DeviceRecord:
        check_partition(device_id, record)
        await asyncio.sleep(0)
        if device_id not in self._documents:
            raise AirboxRecordMissingError(f"No record to replace for {device_id}", device_id=device_id, status_code=404)
        self._documents[device_id] = record.to_document()
        return DeviceRecord.from_document(copy.deepcopy(self._documents[device_id]))

    async def create(self, device_id: str, record: DeviceRecord) -> DeviceRecord:
        check_partition(device_id, record)
        await asyncio.sleep(0)
        if device_id in self._documents:
            raise AirboxConflictError(f"Record for {device_id} already exists", device_id=device_id, status_code=409)
        self._documents[device_id] = record.to_document()
        return DeviceRecord.from_document(copy.deepcopy(self._documents[device_id]))

    def document(self, device_id: str) -> dict[str, Any] | None:
        """Stored document for *device_id*, as it would be persisted."""
        document = self._documents.get(device_id)
        return copy.deepcopy(document) if document is not None else None

    def device_ids(self) -> list[str]:
        return list(self._documents)


class InMemoryDirectorySource:
    """:class:`~pyairbox.store.base.DirectorySource` over a fixed directory."""

    def __init__(self, directory: DeviceDirectory) -> None:
        self._directory = directory

    async def get_directory(self) -> DeviceDirectory:
        return self._directory
