"""Shared utilities."""

from jsonbound.utils.logging import configure_logging

__all__ = ["configure_logging"]
