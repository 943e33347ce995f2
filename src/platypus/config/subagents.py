"""Sub-agent session settings."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SubAgentSettings(BaseModel):
    """Behaviour of the sub-agent registry and tool adapters.

    Attributes:
        auto_open: Make a newly started session the active one.
        strict_completion: Raise instead of logging when a completion
            arrives for an unknown session.
        sub_chat_prefix: Prefix of derived sub-agent chat ids.
        tool_call_prefix: Prefix stripped from tool call ids before
            deriving a sub-agent chat id.
        delegation_tool_name: Tool name the parent model calls to delegate.
        completion_tool_name: Tool name the sub-agent calls to finish.
        default_agent_name: Display name when an agent id is unknown.
    """

    auto_open: bool = Field(
        default=True,
        description="Activate sessions as they start",
    )
    strict_completion: bool = Field(
        default=False,
        description="Raise SessionNotFoundError for unknown completions",
    )
    sub_chat_prefix: str = Field(default="sub_")
    tool_call_prefix: str = Field(default="tool_newTask_")
    delegation_tool_name: str = Field(default="newTask")
    completion_tool_name: str = Field(default="taskResult")
    default_agent_name: str = Field(default="Sub-agent")
