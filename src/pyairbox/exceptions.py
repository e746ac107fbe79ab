"""Custom exception hierarchy for pyairbox."""

from __future__ import annotations


class AirboxError(Exception):
    """Base exception for all pyairbox errors."""


class AirboxConfigError(AirboxError):
    """Invalid or missing configuration."""


class AirboxTransportError(AirboxError):
    """Telemetry request did not complete (network, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        device_id: str = "",
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        self.device_id = device_id
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class AirboxDecodeError(AirboxError):
    """Telemetry payload was received but is not a valid feed."""

    def __init__(self, message: str, *, device_id: str = "") -> None:
        self.device_id = device_id
        super().__init__(message)


class AirboxStoreError(AirboxError):
    """Record store operation failed (unavailable, throttled, rejected)."""

    def __init__(
        self,
        message: str,
        *,
        device_id: str = "",
        status_code: int | None = None,
    ) -> None:
        self.device_id = device_id
        self.status_code = status_code
        super().__init__(message)


class AirboxConflictError(AirboxStoreError):
    """Create-if-absent found the partition already occupied.

    Raised when another writer created the record between the lookup and
    the create. The reconciler reports it and does not retry.
    """


class AirboxRecordMissingError(AirboxStoreError):
    """Replace targeted a partition that holds no record."""
