"""Sub-agent session subsystem.

Coordinates delegations from a parent chat to sub-agents: the registry
tracks one session per delegation tool call, the pane keeps each
session's chat mounted, and transcript restoration keeps completed
delegations from being launched again after a reload.

Quick Start:
    >>> from platypus.subagents import SubAgentRegistry, TaskResult
    >>> registry = SubAgentRegistry()
    >>> registry.start_session("parent-c1", "tc-1", "agent-42", "Summarize the doc")
    >>> registry.complete_session("tc-1", TaskResult(status="success", result="Done."))
    >>> registry.get_session("tc-1").result.result
    'Done.'

Classes:
    SubAgentRegistry: Ordered session registry with active-session pointer.
    SubAgentSession: Bookkeeping record of one delegation.
    TaskResult: Outcome reported by a sub-agent.
    SubAgentPane: Keeps every session's chat mounted.
    SubAgentChat: pydantic-ai conversation running a delegate.

Exceptions:
    SubAgentError: Base exception for all sub-agent errors.
    SessionNotFoundError: Referenced session does not exist.
    SessionContextError: Component wired without its session.
    InvalidToolCallError: Tool call cannot identify a session.
    AgentDefinitionError: Agent definition file is invalid.
"""

from __future__ import annotations

from platypus.subagents.chat import SubAgentChat, make_chat_factory
from platypus.subagents.config import SubAgentSession, TaskResult, TaskStatus, to_sub_chat_id
from platypus.subagents.errors import (
    AgentDefinitionError,
    InvalidToolCallError,
    SessionContextError,
    SessionNotFoundError,
    SubAgentError,
)
from platypus.subagents.history import (
    DelegationRecord,
    find_completed_tool_calls,
    find_delegations,
    restore_from_transcript,
)
from platypus.subagents.pane import PaneContext, PaneEntry, SubAgentPane
from platypus.subagents.registry import SubAgentRegistry

__all__ = [
    "AgentDefinitionError",
    "DelegationRecord",
    "InvalidToolCallError",
    "PaneContext",
    "PaneEntry",
    "SessionContextError",
    "SessionNotFoundError",
    "SubAgentChat",
    "SubAgentError",
    "SubAgentPane",
    "SubAgentRegistry",
    "SubAgentSession",
    "TaskResult",
    "TaskStatus",
    "find_completed_tool_calls",
    "find_delegations",
    "make_chat_factory",
    "restore_from_transcript",
    "to_sub_chat_id",
]
