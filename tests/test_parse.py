from __future__ import annotations

import json

import pytest
from fakes import feed_payload

from pyairbox.exceptions import AirboxDecodeError, AirboxStoreError, AirboxTransportError
from pyairbox.ingestion.parse import parse_feed


def test_valid_payload_decodes() -> None:
    feed = parse_feed(feed_payload("D1", "Library"), device_id="D1")
    assert feed.device_id == "D1"
    assert feed.source == "last-all-airbox by IIS-NRL"
    assert [r.name for r in feed.readings] == ["Library"]


def test_bytes_payload_decodes() -> None:
    feed = parse_feed(feed_payload("D1", "Library").encode("utf-8"))
    assert feed.readings[0].name == "Library"


def test_empty_feed_is_valid_not_an_error() -> None:
    feed = parse_feed(json.dumps({"device_id": "D1", "source": "s", "feeds": []}))
    assert feed.readings == []


def test_missing_feeds_key_is_empty_feed() -> None:
    feed = parse_feed(json.dumps({"device_id": "D1"}))
    assert feed.readings == []


def test_provenance_not_checked_against_requested_id() -> None:
    feed = parse_feed(feed_payload("SOMEONE-ELSE", "x"), device_id="D1")
    assert feed.device_id == "SOMEONE-ELSE"


@pytest.mark.parametrize(
    "payload",
    [
        "",
        "<html><body>Bad Gateway</body></html>",
        '{"device_id": "D1", "feeds": [',
        "[]",
        '"just a string"',
        json.dumps({"device_id": "D1", "feeds": "none"}),
        json.dumps({"device_id": "D1", "feeds": [{"AirBox": "oops"}]}),
        json.dumps({"device_id": "D1", "feeds": [{"AirBox": {"timestamp": "yesterday"}}]}),
        b"\xff\xfe\x00garbage",
    ],
)
def test_undecodable_payloads_raise_decode_error(payload: str | bytes) -> None:
    with pytest.raises(AirboxDecodeError) as exc_info:
        parse_feed(payload, device_id="D1")

    exc = exc_info.value
    assert exc.device_id == "D1"
    assert not isinstance(exc, (AirboxTransportError, AirboxStoreError))
