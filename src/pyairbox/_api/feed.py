"""Latest-reading endpoint of the LASS telemetry API."""

from __future__ import annotations

import logging

from pyairbox._redact import payload_preview
from pyairbox._transport import Transport
from pyairbox.config import AirboxConfig
from pyairbox.exceptions import AirboxTransportError

_logger = logging.getLogger(__name__)


async def fetch_raw_feed(config: AirboxConfig, transport: Transport, device_id: str) -> str | bytes:
    """Fetch the raw latest-reading payload for *device_id*.

    The identifier is interpolated into the URL template as is. Transport
    failures are re-raised tagged with the device id; the body is returned
    undecoded.
    """
    url = config.feed_url(device_id)
    try:
        body = await transport.get_body(url)
    except AirboxTransportError as exc:
        exc.device_id = device_id
        raise
    _logger.debug("Feed payload for %s: %s", device_id, payload_preview(body))
    return body
