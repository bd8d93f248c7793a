"""Shared constants, exceptions and logging helpers."""
