"""Feed payload decoding.

Separates "payload is not a feed" (:class:`AirboxDecodeError`) from "feed
decoded but holds no readings" (a valid :class:`TelemetryFeed` with an
empty ``readings`` list). Callers branch on these two cases differently.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from pyairbox.exceptions import AirboxDecodeError
from pyairbox.models.feed import TelemetryFeed


def parse_feed(raw: str | bytes, *, device_id: str = "") -> TelemetryFeed:
    """Decode a latest-reading payload.

    Raises
    ------
    AirboxDecodeError
        The payload is not JSON, not a JSON object, or does not match
        the feed shape.
    """
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise AirboxDecodeError(f"Feed payload for {device_id or '?'} is not JSON: {exc}", device_id=device_id) from exc

    if not isinstance(decoded, dict):
        raise AirboxDecodeError(
            f"Feed payload for {device_id or '?'} is a JSON {type(decoded).__name__}, expected an object",
            device_id=device_id,
        )

    try:
        return TelemetryFeed.model_validate(decoded)
    except ValidationError as exc:
        raise AirboxDecodeError(
            f"Feed payload for {device_id or '?'} does not match the feed shape: {exc.error_count()} error(s)",
            device_id=device_id,
        ) from exc
