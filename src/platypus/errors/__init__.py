"""Error handling."""

from platypus.errors.exceptions import ConfigurationError, PlatypusError

__all__ = [
    "ConfigurationError",
    "PlatypusError",
]
