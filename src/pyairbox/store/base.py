"""Store capability interfaces.

The reconciler only talks to these protocols. Every operation is scoped
to a single partition (the device id); there are no multi-key
transactions and no cross-partition consistency guarantees.
"""

from __future__ import annotations

from typing import Protocol

from pyairbox.models.directory import DeviceDirectory
from pyairbox.models.record import DeviceRecord


class RecordStore(Protocol):
    """Per-device record persistence."""

    async def get(self, device_id: str) -> DeviceRecord | None:
        """Return the stored record, or ``None`` when the partition is empty."""
        ...

    async def replace(self, device_id: str, record: DeviceRecord) -> DeviceRecord:
        """Overwrite an existing record.

        Raises :class:`~pyairbox.exceptions.AirboxRecordMissingError` when
        the partition is empty.
        """
        ...

    async def create(self, device_id: str, record: DeviceRecord) -> DeviceRecord:
        """Create a record in an empty partition.

        Raises :class:`~pyairbox.exceptions.AirboxConflictError` when the
        partition is already occupied.
        """
        ...


class DirectorySource(Protocol):
    """Read-only access to the device directory."""

    async def get_directory(self) -> DeviceDirectory:
        ...


def check_partition(device_id: str, record: DeviceRecord) -> None:
    """Reject writes whose record belongs to another partition."""
    if record.id != device_id:
        raise ValueError(f"record id {record.id!r} does not match partition {device_id!r}")
