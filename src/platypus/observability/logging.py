"""Logging setup for platypus."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from platypus.config.logging_config import LoggingConfig

_PLAIN_FORMAT = "%(levelname)s %(name)s: %(message)s"
_PLAIN_FORMAT_WITH_TIME = "%(asctime)s " + _PLAIN_FORMAT

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys() | {"message", "asctime"}
)


class StructuredFormatter(logging.Formatter):
    """Format records as single-line JSON objects.

    Any ``extra`` fields passed to the logging call are included
    as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Configure the ``platypus`` logger.

    Replaces handlers previously installed by this function, so it is
    safe to call more than once.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.
        handler: Handler to attach. Defaults to a stderr ``StreamHandler``.

    Returns:
        The configured ``platypus`` logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger("platypus")
    logger.setLevel(config.level)

    for existing in list(logger.handlers):
        if getattr(existing, "_platypus_handler", False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    if config.structured:
        handler.setFormatter(StructuredFormatter())
    elif config.include_timestamp:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT_WITH_TIME))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    handler._platypus_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    return logger
