"""Sub-agent session data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["success", "error"]


class TaskResult(BaseModel):
    """Outcome a sub-agent reports when it finishes its task.

    This is also the input schema of the completion tool the sub-agent
    model calls.

    Attributes:
        status: ``"success"`` if the task was completed, ``"error"`` otherwise.
        result: Findings and outputs of the task, as literal text.
    """

    model_config = ConfigDict(frozen=True)

    status: TaskStatus = Field(
        description='"success" if you completed the task, "error" if you could not',
    )
    result: str = Field(
        description="All relevant findings and outputs of the task",
    )

    @property
    def succeeded(self) -> bool:
        """Whether the sub-agent reported success."""
        return self.status == "success"


@dataclass(frozen=True)
class SubAgentSession:
    """Bookkeeping record for one delegation.

    Each session maps 1:1 to a delegation tool call in the parent chat.
    Sessions are immutable; completion replaces the registry entry.

    Attributes:
        tool_call_id: Id of the originating delegation tool call.
        parent_chat_id: Conversation that issued the delegation.
        sub_agent_id: Agent definition run as the delegate.
        sub_chat_id: Conversation the sub-agent runs in.
        task: Instruction text handed to the sub-agent.
        result: ``None`` while running; set once on completion.
    """

    tool_call_id: str
    parent_chat_id: str
    sub_agent_id: str
    sub_chat_id: str
    task: str
    result: TaskResult | None = None

    @property
    def is_complete(self) -> bool:
        """Whether a result has been recorded."""
        return self.result is not None


def to_sub_chat_id(
    tool_call_id: str,
    *,
    tool_call_prefix: str = "tool_newTask_",
    sub_chat_prefix: str = "sub_",
) -> str:
    """Derive a stable sub-agent chat id from a tool call id.

    The derivation is deterministic so a reloaded parent chat maps each
    delegation back to the same sub-agent conversation.

    Args:
        tool_call_id: The delegation tool call id.
        tool_call_prefix: Prefix stripped from the tool call id if present.
        sub_chat_prefix: Prefix of the returned chat id.

    Returns:
        The sub-agent chat id.

    Example:
        >>> to_sub_chat_id("tool_newTask_abc123")
        'sub_abc123'
    """
    unique_part = tool_call_id.removeprefix(tool_call_prefix)
    return f"{sub_chat_prefix}{unique_part}"
