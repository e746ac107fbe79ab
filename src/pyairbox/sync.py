"""Fan-out of reconciliations across the device directory.

A pass launches one task per directory entry and returns at once. The
returned :class:`SyncPass` keeps the task handles so callers can await
them; nothing aggregates the per-device results into a pass verdict.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from pyairbox.models.directory import DeviceDirectory
from pyairbox.reconcile import Reconciler, ReconcileResult
from pyairbox.store.base import DirectorySource

_logger = logging.getLogger(__name__)


class SyncPass:
    """Handles of the reconciliations launched by one pass."""

    def __init__(self, device_ids: list[str], tasks: list[asyncio.Task[ReconcileResult]]) -> None:
        self._device_ids = device_ids
        self._tasks = tasks

    @property
    def device_ids(self) -> list[str]:
        return list(self._device_ids)

    @property
    def tasks(self) -> tuple[asyncio.Task[ReconcileResult], ...]:
        return tuple(self._tasks)

    def done(self) -> bool:
        return all(task.done() for task in self._tasks)

    async def wait(self) -> list[ReconcileResult | BaseException]:
        """Await every reconciliation of this pass, in launch order.

        Unexpected exceptions are returned in place of the result rather
        than raised, so one broken device cannot hide the others.
        """
        return await asyncio.gather(*self._tasks, return_exceptions=True)


class SyncDriver:
    """Launches reconciliations without joining them."""

    def __init__(self, reconciler: Reconciler) -> None:
        self._reconciler = reconciler
        self._pending: set[asyncio.Task[ReconcileResult]] = set()

    @property
    def pending(self) -> int:
        """Number of reconciliations still running across all passes."""
        return len(self._pending)

    def run_pass(self, directory: DeviceDirectory) -> SyncPass:
        """Start one reconciliation per directory entry and return."""
        return self.launch(directory.device_ids())

    async def run_directory_pass(self, source: DirectorySource) -> SyncPass:
        """Read the directory once from *source*, then start a pass."""
        directory = await source.get_directory()
        return self.run_pass(directory)

    def launch(self, device_ids: Iterable[str]) -> SyncPass:
        """Start one reconciliation per identifier, duplicates included.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()
        ids = list(device_ids)
        _logger.info("Starting sync pass over %d device(s)", len(ids))

        tasks: list[asyncio.Task[ReconcileResult]] = []
        for device_id in ids:
            _logger.debug("Starting reconcile for %s", device_id)
            task = loop.create_task(
                self._reconciler.reconcile(device_id),
                name=f"pyairbox-reconcile-{device_id}",
            )
            # Strong reference until done; the loop only keeps weak ones.
            self._pending.add(task)
            task.add_done_callback(self._on_task_done)
            tasks.append(task)
        return SyncPass(ids, tasks)

    async def drain(self) -> None:
        """Wait until every launched reconciliation has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _on_task_done(self, task: asyncio.Task[ReconcileResult]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            _logger.warning("%s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Unexpected error in %s", task.get_name(), exc_info=exc)
