"""Logging configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging configuration for the ``platypus`` logger tree.

    Attributes:
        level: Minimum level emitted by platypus loggers.
        structured: Emit one JSON object per record instead of plain text.
        include_timestamp: Prefix plain-text records with a timestamp.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    structured: bool = Field(
        default=False,
        description="Emit JSON structured logs",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamps in plain-text output",
    )
