"""
Platypus - sub-agent delegation core for multi-agent chat.

A parent conversation delegates self-contained tasks to sub-agents through
a delegation tool call; each sub-agent works in its own conversation and
reports back through a completion tool call.

Quick Start:
    >>> from platypus import NewTaskTool, SubAgentRegistry, ToolCallState, ToolUIPart
    >>> registry = SubAgentRegistry()
    >>> tool = NewTaskTool(registry, parent_chat_id="chat-1")
    >>> part = ToolUIPart(
    ...     tool_call_id="tc-1",
    ...     state=ToolCallState.INPUT_AVAILABLE,
    ...     input={"subAgentId": "agent-42", "task": "Summarize the doc"},
    ... )
    >>> tool.handle(part).status.value
    'running'

With Settings:
    >>> from platypus import PlatypusSettings, SubAgentRegistry
    >>> settings = PlatypusSettings()  # Loads from env and .env
    >>> registry = SubAgentRegistry(settings.subagents)
"""

from platypus.agents import AgentDefinition, render_system_prompt
from platypus.config import LoggingConfig, PlatypusSettings, SubAgentSettings
from platypus.errors import ConfigurationError, PlatypusError
from platypus.observability import setup_logging
from platypus.subagents import (
    PaneContext,
    SessionContextError,
    SessionNotFoundError,
    SubAgentChat,
    SubAgentError,
    SubAgentPane,
    SubAgentRegistry,
    SubAgentSession,
    TaskResult,
    restore_from_transcript,
)
from platypus.tools import (
    DelegationStatus,
    NewTaskTool,
    TaskResultTool,
    ToolCallState,
    ToolUIPart,
)

__all__ = [
    # Agents
    "AgentDefinition",
    "render_system_prompt",
    # Config
    "LoggingConfig",
    "PlatypusSettings",
    "SubAgentSettings",
    "setup_logging",
    # Errors
    "ConfigurationError",
    "PlatypusError",
    "SessionContextError",
    "SessionNotFoundError",
    "SubAgentError",
    # Sessions
    "PaneContext",
    "SubAgentChat",
    "SubAgentPane",
    "SubAgentRegistry",
    "SubAgentSession",
    "TaskResult",
    "restore_from_transcript",
    # Tools
    "DelegationStatus",
    "NewTaskTool",
    "TaskResultTool",
    "ToolCallState",
    "ToolUIPart",
    # Version
    "__version__",
]

__version__ = "0.1.0"
