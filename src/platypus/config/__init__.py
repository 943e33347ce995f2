"""Configuration system for platypus.

Main exports:
- PlatypusSettings: Root configuration class
- LoggingConfig: Logging configuration
- SubAgentSettings: Registry and tool adapter behaviour
"""

from platypus.config.logging_config import LoggingConfig
from platypus.config.settings import PlatypusSettings
from platypus.config.subagents import SubAgentSettings

__all__ = [
    "LoggingConfig",
    "PlatypusSettings",
    "SubAgentSettings",
]
