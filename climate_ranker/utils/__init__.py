"""Logging setup and numeric helpers."""
