"""Telemetry API endpoint modules (internal)."""
