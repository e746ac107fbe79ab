"""Helpers for safe debug logging.

The config carries the Cosmos account key and feed payloads can be large
or undecodable, so neither goes to the log as is.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from pyairbox.config import AirboxConfig

_SECRET_FIELDS: frozenset[str] = frozenset({"cosmos_key"})


def redact_config(config: AirboxConfig) -> dict[str, Any]:
    """Return the config fields as a dict with secrets masked."""
    redacted: dict[str, Any] = {}
    for item in dataclasses.fields(config):
        value = getattr(config, item.name)
        if item.name in _SECRET_FIELDS and value:
            value = "<redacted>"
        redacted[item.name] = value
    return redacted


def payload_preview(payload: str | bytes, *, limit: int = 256) -> str:
    """Printable head of a response body, truncated to *limit* characters."""
    if isinstance(payload, bytes):
        text = payload[:limit].decode("utf-8", errors="replace")
    else:
        text = payload[:limit]
    if len(payload) > limit:
        return f"{text}…<truncated>"
    return text
