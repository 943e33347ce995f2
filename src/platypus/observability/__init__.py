"""Logging and observability."""

from platypus.observability.logging import StructuredFormatter, setup_logging

__all__ = [
    "StructuredFormatter",
    "setup_logging",
]
