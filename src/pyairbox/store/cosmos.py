"""Azure Cosmos DB adapters.

The container is expected to exist already, partitioned on
``/partitionKey``; nothing here creates databases or containers.
"""

from __future__ import annotations

import logging
from typing import Any

from azure.core.exceptions import AzureError
from azure.cosmos import exceptions as cosmos_exceptions
from azure.cosmos.aio import ContainerProxy, CosmosClient
from pydantic import ValidationError

from pyairbox.config import AirboxConfig
from pyairbox.exceptions import AirboxConflictError, AirboxRecordMissingError, AirboxStoreError
from pyairbox.models.directory import DeviceDirectory
from pyairbox.models.record import DeviceRecord
from pyairbox.store.base import check_partition

_logger = logging.getLogger(__name__)


def open_cosmos_client(config: AirboxConfig) -> CosmosClient:
    """Build an async Cosmos client from *config*.

    The caller owns the client and must close it (``async with``).
    """
    endpoint, key = config.require_cosmos()
    return CosmosClient(endpoint, credential=key)


def get_container(client: CosmosClient, config: AirboxConfig) -> ContainerProxy:
    """Return the records container proxy without provisioning it."""
    database = client.get_database_client(config.database_id)
    return database.get_container_client(config.container_id)


def _status(exc: AzureError) -> int | None:
    status = getattr(exc, "status_code", None)
    return status if isinstance(status, int) else None


def _store_error(operation: str, device_id: str, exc: AzureError) -> AirboxStoreError:
    return AirboxStoreError(
        f"Cosmos {operation} failed for {device_id}: {exc}",
        device_id=device_id,
        status_code=_status(exc),
    )


def _parse_record(device_id: str, document: dict[str, Any]) -> DeviceRecord:
    try:
        return DeviceRecord.from_document(document)
    except ValidationError as exc:
        raise AirboxStoreError(f"Stored record for {device_id} is unreadable: {exc}", device_id=device_id) from exc


class CosmosRecordStore:
    """:class:`~pyairbox.store.base.RecordStore` over a Cosmos container."""

    def __init__(self, container: ContainerProxy) -> None:
        self._container = container

    async def get(self, device_id: str) -> DeviceRecord | None:
        try:
            document = await self._container.read_item(item=device_id, partition_key=device_id)
        except cosmos_exceptions.CosmosResourceNotFoundError:
            return None
        except AzureError as exc:
            raise _store_error("read", device_id, exc) from exc
        return _parse_record(device_id, document)

    async def replace(self, device_id: str, record: DeviceRecord) -> DeviceRecord:
        check_partition(device_id, record)
        try:
            document = await self._container.replace_item(item=device_id, body=record.to_document())
        except cosmos_exceptions.CosmosResourceNotFoundError as exc:
            raise AirboxRecordMissingError(
                f"No record to replace for {device_id}",
                device_id=device_id,
                status_code=_status(exc),
            ) from exc
        except AzureError as exc:
            raise _store_error("replace", device_id, exc) from exc
        _logger.debug("Replaced %s", device_id)
        return _parse_record(device_id, document)

    async def create(self, device_id: str, record: DeviceRecord) -> DeviceRecord:
        check_partition(device_id, record)
        try:
            document = await self._container.create_item(body=record.to_document())
        except cosmos_exceptions.CosmosResourceExistsError as exc:
            raise AirboxConflictError(
                f"Record for {device_id} already exists",
                device_id=device_id,
                status_code=_status(exc),
            ) from exc
        except AzureError as exc:
            raise _store_error("create", device_id, exc) from exc
        _logger.debug("Created %s", device_id)
        return _parse_record(device_id, document)


class CosmosDirectorySource:
    """Reads the directory document from the records container."""

    def __init__(self, container: ContainerProxy, directory_id: str) -> None:
        self._container = container
        self._directory_id = directory_id

    async def get_directory(self) -> DeviceDirectory:
        try:
            document = await self._container.read_item(item=self._directory_id, partition_key=self._directory_id)
        except cosmos_exceptions.CosmosResourceNotFoundError as exc:
            raise AirboxRecordMissingError(
                f"Directory record {self._directory_id} not found",
                device_id=self._directory_id,
                status_code=_status(exc),
            ) from exc
        except AzureError as exc:
            raise _store_error("read", self._directory_id, exc) from exc
        try:
            return DeviceDirectory.model_validate(document)
        except ValidationError as exc:
            raise AirboxStoreError(
                f"Directory record {self._directory_id} is unreadable: {exc}",
                device_id=self._directory_id,
            ) from exc
