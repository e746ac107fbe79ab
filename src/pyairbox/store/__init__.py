"""Record store layer.

The reconciler depends only on the protocols in :mod:`pyairbox.store.base`.
The Cosmos adapters live in :mod:`pyairbox.store.cosmos` and are imported
explicitly so the in-memory store works without Azure credentials.
"""

from pyairbox.store.base import DirectorySource, RecordStore
from pyairbox.store.memory import InMemoryDirectorySource, InMemoryRecordStore

__all__ = [
    "DirectorySource",
    "InMemoryDirectorySource",
    "InMemoryRecordStore",
    "RecordStore",
]
