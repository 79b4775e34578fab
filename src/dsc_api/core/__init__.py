"""Core configuration, validation and response helpers."""
