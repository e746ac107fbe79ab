"""Ingestion layer.

This package turns raw telemetry payloads into validated feed models.
"""

__all__: list[str] = []
