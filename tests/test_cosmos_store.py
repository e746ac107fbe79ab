from __future__ import annotations

from typing import Any

import pytest
from azure.core.exceptions import ServiceRequestError
from azure.cosmos import exceptions as cosmos_exceptions
from fakes import stored_document

from pyairbox.config import AirboxConfig
from pyairbox.exceptions import AirboxConfigError, AirboxConflictError, AirboxRecordMissingError, AirboxStoreError
from pyairbox.models.record import DeviceRecord
from pyairbox.store.cosmos import CosmosDirectorySource, CosmosRecordStore, open_cosmos_client


class _FakeContainer:
    """Mimics the ``azure.cosmos.aio.ContainerProxy`` item methods used by the store."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self.documents = dict(documents or {})
        self.error: Exception | None = None
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def read_item(self, item: str, partition_key: str) -> dict[str, Any]:
        self.calls.append(("read_item", {"item": item, "partition_key": partition_key}))
        self._check()
        if item not in self.documents:
            raise cosmos_exceptions.CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        return dict(self.documents[item], _rid="r", _etag='"e"', _ts=1)

    async def replace_item(self, item: str, body: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("replace_item", {"item": item, "body": body}))
        self._check()
        if item not in self.documents:
            raise cosmos_exceptions.CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        self.documents[item] = body
        return dict(body, _rid="r", _etag='"e2"', _ts=2)

    async def create_item(self, body: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create_item", {"body": body}))
        self._check()
        if body["id"] in self.documents:
            raise cosmos_exceptions.CosmosResourceExistsError(status_code=409, message="Conflict")
        self.documents[body["id"]] = body
        return dict(body, _rid="r", _etag='"e1"', _ts=1)


@pytest.mark.asyncio
async def test_get_reads_point_item_in_own_partition() -> None:
    container = _FakeContainer({"D1": stored_document("D1", name="Library")})
    record = await CosmosRecordStore(container).get("D1")  # type: ignore[arg-type]

    assert record is not None
    assert record.display_name == "Library"
    assert container.calls == [("read_item", {"item": "D1", "partition_key": "D1"})]


@pytest.mark.asyncio
async def test_get_missing_returns_none() -> None:
    assert await CosmosRecordStore(_FakeContainer()).get("D1") is None  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_get_unreadable_document_is_store_error() -> None:
    container = _FakeContainer({"D1": {"id": "D1", "partitionKey": "OTHER"}})
    with pytest.raises(AirboxStoreError):
        await CosmosRecordStore(container).get("D1")  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_replace_sends_full_document() -> None:
    container = _FakeContainer({"D1": stored_document("D1")})
    record = DeviceRecord(id="D1", display_name="Library")

    committed = await CosmosRecordStore(container).replace("D1", record)  # type: ignore[arg-type]

    assert committed == record
    name, kwargs = container.calls[-1]
    assert name == "replace_item"
    assert kwargs["item"] == "D1"
    assert kwargs["body"] == record.to_document()


@pytest.mark.asyncio
async def test_replace_missing_maps_to_record_missing() -> None:
    with pytest.raises(AirboxRecordMissingError) as exc_info:
        await CosmosRecordStore(_FakeContainer()).replace("D1", DeviceRecord(id="D1"))  # type: ignore[arg-type]
    assert exc_info.value.status_code == 404
    assert exc_info.value.device_id == "D1"


@pytest.mark.asyncio
async def test_create_conflict_maps_to_conflict_error() -> None:
    container = _FakeContainer({"D1": stored_document("D1")})
    with pytest.raises(AirboxConflictError) as exc_info:
        await CosmosRecordStore(container).create("D1", DeviceRecord(id="D1"))  # type: ignore[arg-type]
    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_create_writes_partition_key() -> None:
    container = _FakeContainer()
    await CosmosRecordStore(container).create("D1", DeviceRecord(id="D1", corrupt=True))  # type: ignore[arg-type]
    assert container.documents["D1"]["partitionKey"] == "D1"
    assert container.documents["D1"]["jsonIsBroken"] is True


@pytest.mark.asyncio
async def test_other_http_errors_map_to_store_error() -> None:
    container = _FakeContainer({"D1": stored_document("D1")})
    container.error = cosmos_exceptions.CosmosHttpResponseError(status_code=429, message="Request rate is large")

    with pytest.raises(AirboxStoreError) as exc_info:
        await CosmosRecordStore(container).replace("D1", DeviceRecord(id="D1"))  # type: ignore[arg-type]

    assert exc_info.value.status_code == 429
    assert not isinstance(exc_info.value, (AirboxConflictError, AirboxRecordMissingError))


@pytest.mark.asyncio
async def test_network_errors_map_to_store_error() -> None:
    container = _FakeContainer()
    container.error = ServiceRequestError("name resolution failed")

    with pytest.raises(AirboxStoreError) as exc_info:
        await CosmosRecordStore(container).get("D1")  # type: ignore[arg-type]

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_write_to_wrong_partition_rejected() -> None:
    with pytest.raises(ValueError):
        await CosmosRecordStore(_FakeContainer()).create("D1", DeviceRecord(id="D2"))  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_directory_source_reads_directory_record() -> None:
    container = _FakeContainer(
        {"AirBoxes": {"id": "AirBoxes", "partitionKey": "AirBoxes", "airBoxSite": {"XinKeRoad": "D1", "Test": "D2"}}}
    )
    directory = await CosmosDirectorySource(container, "AirBoxes").get_directory()  # type: ignore[arg-type]
    assert directory.device_ids() == ["D1", "D2"]


@pytest.mark.asyncio
async def test_missing_directory_is_reported() -> None:
    with pytest.raises(AirboxRecordMissingError):
        await CosmosDirectorySource(_FakeContainer(), "AirBoxes").get_directory()  # type: ignore[arg-type]


def test_open_client_requires_credentials() -> None:
    with pytest.raises(AirboxConfigError):
        open_cosmos_client(AirboxConfig())
