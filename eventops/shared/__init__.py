"""Shared kernel: enums, telemetry and utilities."""
