"""High-level async client for AirBox telemetry sync."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from azure.cosmos.aio import CosmosClient

from pyairbox._api.feed import fetch_raw_feed
from pyairbox._redact import redact_config
from pyairbox._transport import HttpTransport, Transport
from pyairbox.config import AirboxConfig
from pyairbox.exceptions import AirboxError
from pyairbox.ingestion.parse import parse_feed
from pyairbox.models.directory import DeviceDirectory
from pyairbox.models.feed import TelemetryFeed
from pyairbox.reconcile import Reconciler, ReconcileResult
from pyairbox.store.base import DirectorySource, RecordStore
from pyairbox.store.cosmos import CosmosDirectorySource, CosmosRecordStore, get_container, open_cosmos_client
from pyairbox.sync import SyncDriver, SyncPass

_logger = logging.getLogger(__name__)


class AirboxClient:
    """Async client wiring transport, store and sync driver together.

    Usage::

        async with AirboxClient(AirboxConfig.from_env()) as client:
            sync_pass = await client.start_directory_pass()
            results = await sync_pass.wait()

    Without an explicit *store* the client opens the Cosmos container
    named in the config. Leaving the context waits for reconciliations
    still in flight before closing the HTTP and Cosmos sessions.
    """

    def __init__(
        self,
        config: AirboxConfig,
        *,
        store: RecordStore | None = None,
        directory_source: DirectorySource | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._directory_source = directory_source
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._cosmos: CosmosClient | None = None
        self._driver: SyncDriver | None = None
        self._reconciler: Reconciler | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AirboxClient:
        _logger.debug("Opening client with %s", redact_config(self._config))
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)

        if self._store is None or self._directory_source is None:
            self._cosmos = open_cosmos_client(self._config)
            container = get_container(self._cosmos, self._config)
            if self._store is None:
                self._store = CosmosRecordStore(container)
            if self._directory_source is None:
                self._directory_source = CosmosDirectorySource(container, self._config.directory_id)

        self._reconciler = Reconciler(self._config, self._transport, self._store)
        self._driver = SyncDriver(self._reconciler)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._driver is not None:
            await self._driver.drain()
            self._driver = None
        self._reconciler = None
        if self._cosmos is not None:
            await self._cosmos.close()
            self._cosmos = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_driver(self) -> SyncDriver:
        if self._driver is None:
            raise AirboxError("Client not initialized. Use 'async with AirboxClient(...) as client:'")
        return self._driver

    def _require_reconciler(self) -> Reconciler:
        if self._reconciler is None:
            raise AirboxError("Client not initialized. Use 'async with AirboxClient(...) as client:'")
        return self._reconciler

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AirboxError("Client not initialized. Use 'async with AirboxClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_feed(self, device_id: str) -> TelemetryFeed:
        """Fetch and decode the latest feed of one device without storing it."""
        raw = await fetch_raw_feed(self._config, self._require_transport(), device_id)
        return parse_feed(raw, device_id=device_id)

    async def get_directory(self) -> DeviceDirectory:
        self._require_driver()
        assert self._directory_source is not None  # noqa: S101
        return await self._directory_source.get_directory()

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    async def reconcile(self, device_id: str) -> ReconcileResult:
        """Reconcile one device and wait for the result."""
        return await self._require_reconciler().reconcile(device_id)

    def start_pass(self, directory: DeviceDirectory) -> SyncPass:
        """Launch a pass over *directory* without waiting for it."""
        return self._require_driver().run_pass(directory)

    def start_devices(self, device_ids: list[str]) -> SyncPass:
        """Launch a pass over explicit device ids, bypassing the directory."""
        return self._require_driver().launch(device_ids)

    async def start_directory_pass(self) -> SyncPass:
        """Read the stored directory and launch a pass over it."""
        driver = self._require_driver()
        assert self._directory_source is not None  # noqa: S101
        return await driver.run_directory_pass(self._directory_source)
