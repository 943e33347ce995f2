"""Tool-call lifecycle values consumed by the tool adapters.

A tool call streamed by a chat model passes through
``input-streaming -> input-available -> (output-available | output-error)``.
Adapters receive one ``ToolUIPart`` per state notification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic_ai.messages import ToolCallPart


class ToolCallState(str, Enum):
    """Lifecycle state of a streamed tool call.

    Attributes:
        INPUT_STREAMING: Arguments are still being generated.
        INPUT_AVAILABLE: Arguments are final; the call awaits a result.
        OUTPUT_AVAILABLE: The call produced a result.
        OUTPUT_ERROR: The call failed.
    """

    INPUT_STREAMING = "input-streaming"
    INPUT_AVAILABLE = "input-available"
    OUTPUT_AVAILABLE = "output-available"
    OUTPUT_ERROR = "output-error"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transitions follow this state."""
        return self in (ToolCallState.OUTPUT_AVAILABLE, ToolCallState.OUTPUT_ERROR)


@dataclass(frozen=True)
class ToolUIPart:
    """One state notification of a tool call.

    Attributes:
        tool_call_id: Stable id of the tool invocation.
        state: Current lifecycle state.
        input: Decoded arguments; partial or ``None`` while streaming.
        tool_name: Name of the called tool.
        output: Tool result, once available.
        error_text: Failure description in the ``output-error`` state.
    """

    tool_call_id: str
    state: ToolCallState
    input: dict[str, Any] | None = None
    tool_name: str = ""
    output: Any = None
    error_text: str | None = None

    @classmethod
    def from_tool_call(
        cls,
        part: ToolCallPart,
        state: ToolCallState = ToolCallState.INPUT_AVAILABLE,
    ) -> ToolUIPart:
        """Build a notification from a pydantic-ai ``ToolCallPart``.

        Args:
            part: The tool call part from a model response.
            state: Lifecycle state to report.

        Returns:
            The corresponding ``ToolUIPart``.
        """
        return cls(
            tool_call_id=part.tool_call_id,
            state=state,
            input=part.args_as_dict(),
            tool_name=part.tool_name,
        )
