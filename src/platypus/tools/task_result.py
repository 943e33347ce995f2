"""Completion tool adapter.

Runs inside a sub-agent's own chat. When the sub-agent calls the
completion tool, the reported result is recorded on the session the
chat belongs to.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from platypus.subagents.errors import SessionContextError
from platypus.tools.lifecycle import ToolCallState, ToolUIPart
from platypus.tools.schemas import TaskResultInput, parse_input

if TYPE_CHECKING:
    from platypus.subagents.registry import SubAgentRegistry

logger = logging.getLogger(__name__)


class TaskResultTool:
    """Adapter reporting a sub-agent's result back to its session.

    The owning session is bound at construction, one instance per
    sub-agent chat.

    Args:
        registry: The parent chat's session registry.
        tool_call_id: Id of the delegation tool call that owns this chat.

    Raises:
        SessionContextError: If ``tool_call_id`` is missing.
    """

    def __init__(self, registry: SubAgentRegistry, tool_call_id: str | None) -> None:
        if not tool_call_id:
            raise SessionContextError("TaskResultTool")
        self._registry = registry
        self._tool_call_id = tool_call_id
        self._reported: set[str] = set()

    @property
    def tool_call_id(self) -> str:
        """Id of the owning delegation tool call."""
        return self._tool_call_id

    def handle(self, part: ToolUIPart) -> TaskResultInput | None:
        """Process one state notification of a completion tool call.

        The result is reported once per completion tool call, when the
        call's arguments become available with a non-empty result.

        Args:
            part: The completion tool call notification.

        Returns:
            The parsed result, or ``None`` if none is present yet.
        """
        result = parse_input(TaskResultInput, part.input)
        if result is None or not result.result:
            return None

        if part.state is ToolCallState.INPUT_AVAILABLE and part.tool_call_id not in self._reported:
            self._reported.add(part.tool_call_id)
            logger.debug(
                "Sub-agent for '%s' reported %s via '%s'",
                self._tool_call_id,
                result.status,
                part.tool_call_id,
            )
            self._registry.complete_session(self._tool_call_id, result)

        return result

    def render(self, part: ToolUIPart) -> Panel | None:
        """Render the summary card, or ``None`` until a result is present."""
        result = parse_input(TaskResultInput, part.input)
        if result is None or not result.result:
            return None

        if result.succeeded:
            badge = Text("✔ Task Completed", style="bold green")
            border = "green"
        else:
            badge = Text("✘ Task Failed", style="bold red")
            border = "red"

        return Panel(Group(badge, Text(result.result)), border_style=border, expand=False)
