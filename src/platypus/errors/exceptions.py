"""Base exceptions shared across platypus packages."""

from __future__ import annotations

from typing import Any


class PlatypusError(Exception):
    """Root of the platypus exception tree.

    Catch this to handle any error raised by the package.

    Attributes:
        message: What went wrong, for humans.
        cause: The lower-level exception being wrapped, if any.
        details: Extra context passed as keyword arguments. Each key is
            also readable as an attribute, e.g. ``error.source``.
    """

    def __init__(self, message: str, *, cause: Exception | None = None, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details

    def __getattr__(self, name: str) -> Any:
        # Only reached for names missing from __dict__; avoid recursing
        # while unpickling, before details exists.
        if name in ("message", "cause", "details"):
            raise AttributeError(name)
        try:
            return self.details[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            ) from None

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} (caused by: {self.cause})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r})"


class ConfigurationError(PlatypusError):
    """Settings could not be loaded or failed validation.

    Raised with a ``source`` detail naming the file or variable that was read.
    """
