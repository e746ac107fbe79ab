"""Client configuration for pyairbox."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyairbox._constants import CONTAINER_ID, DATABASE_ID, DIRECTORY_ID, FEED_URL_TEMPLATE, USER_AGENT
from pyairbox.exceptions import AirboxConfigError


@dataclasses.dataclass(frozen=True)
class AirboxConfig:
    """Sync engine configuration.

    Parameters
    ----------
    feed_url_template : str
        URL of the latest-reading endpoint, with a ``{device_id}``
        placeholder. Defaults to the public LASS API.
    request_timeout : float
        Total timeout in seconds for one telemetry request.
    cosmos_endpoint : str or None
        Cosmos DB account URI. Only needed by the Cosmos store.
    cosmos_key : str or None
        Cosmos DB account key.
    database_id : str
        Database holding the device records. Must already exist.
    container_id : str
        Container holding the device records, partitioned on
        ``/partitionKey``. Must already exist.
    directory_id : str
        Id (and partition key) of the directory record listing the
        devices to sync.
    user_agent : str
        User agent sent with telemetry requests.
    """

    feed_url_template: str = FEED_URL_TEMPLATE
    request_timeout: float = 30.0
    cosmos_endpoint: str | None = None
    cosmos_key: str | None = dataclasses.field(default=None, repr=False)
    database_id: str = DATABASE_ID
    container_id: str = CONTAINER_ID
    directory_id: str = DIRECTORY_ID
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if "{device_id}" not in self.feed_url_template:
            raise AirboxConfigError("feed_url_template must contain a '{device_id}' placeholder")
        if self.request_timeout <= 0:
            raise AirboxConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    def feed_url(self, device_id: str) -> str:
        """Return the latest-reading URL for *device_id*."""
        return self.feed_url_template.format(device_id=device_id)

    def require_cosmos(self) -> tuple[str, str]:
        """Return ``(endpoint, key)`` or raise if either is missing."""
        if not self.cosmos_endpoint or not self.cosmos_key:
            raise AirboxConfigError("cosmos_endpoint and cosmos_key are required for the Cosmos store")
        return self.cosmos_endpoint, self.cosmos_key

    @classmethod
    def from_env(cls, **overrides: Any) -> AirboxConfig:
        """Create configuration from environment variables.

        Reads the optional ``AIRBOX_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AirboxConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "AIRBOX_FEED_URL_TEMPLATE": "feed_url_template",
            "AIRBOX_COSMOS_ENDPOINT": "cosmos_endpoint",
            "AIRBOX_COSMOS_KEY": "cosmos_key",
            "AIRBOX_DATABASE_ID": "database_id",
            "AIRBOX_CONTAINER_ID": "container_id",
            "AIRBOX_DIRECTORY_ID": "directory_id",
            "AIRBOX_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("AIRBOX_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise AirboxConfigError(f"AIRBOX_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
