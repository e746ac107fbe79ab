"""HTTP transport for the telemetry API."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from pyairbox._redact import payload_preview
from pyairbox.config import AirboxConfig
from pyairbox.exceptions import AirboxTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_body(self, url: str) -> str | bytes:
        ...


class HttpTransport:
    """aiohttp transport returning raw response bodies.

    Only transport-level problems raise: connection errors, timeouts and
    non-2xx statuses. The body is returned as undecoded bytes even when it
    is not JSON or not valid text, so the parser can classify it.
    """

    def __init__(self, config: AirboxConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_body(self, url: str) -> bytes:
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    raise AirboxTransportError(
                        f"HTTP {resp.status} from {url}: {payload_preview(body, limit=200)}",
                        url=url,
                        status_code=resp.status,
                    )
        except AirboxTransportError:
            raise
        except TimeoutError as exc:
            raise AirboxTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise AirboxTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        return body
