"""Root settings for platypus.

Settings are read, in priority order, from constructor arguments,
``PLATYPUS_``-prefixed environment variables (nested with ``__``),
a ``.env`` file, and defaults.

Example::

    PLATYPUS_LOGGING__LEVEL=DEBUG
    PLATYPUS_SUBAGENTS__AUTO_OPEN=false
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from platypus.config.logging_config import LoggingConfig
from platypus.config.subagents import SubAgentSettings
from platypus.errors import ConfigurationError


class PlatypusSettings(BaseSettings):
    """Root configuration.

    Attributes:
        logging: Logging configuration.
        subagents: Sub-agent registry and adapter behaviour.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLATYPUS_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    subagents: SubAgentSettings = Field(default_factory=SubAgentSettings)

    @classmethod
    def from_toml(cls, path: str | Path) -> PlatypusSettings:
        """Load settings from a TOML file.

        Values from the file take precedence over environment variables;
        sections the file does not set fall back to the environment.

        Args:
            path: Path to the TOML file.

        Returns:
            Loaded settings.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid.
        """
        path = Path(path)
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Cannot load settings from {path}",
                cause=e,
                source=str(path),
            ) from e

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in {path}",
                cause=e,
                source=str(path),
            ) from e
