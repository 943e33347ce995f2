"""Delegation tool adapter.

Watches the parent chat's delegation tool calls and starts exactly one
sub-agent session per tool call once its arguments are final.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from rich.text import Text

from platypus.tools.lifecycle import ToolCallState, ToolUIPart
from platypus.tools.schemas import NewTaskInput, parse_input

if TYPE_CHECKING:
    from platypus.agents.config import AgentDefinition
    from platypus.subagents.config import SubAgentSession
    from platypus.subagents.registry import SubAgentRegistry

logger = logging.getLogger(__name__)


class DelegationStatus(str, Enum):
    """Display state of a delegation row.

    Attributes:
        PREPARING: Arguments are still streaming.
        RUNNING: The sub-agent is working.
        SUCCEEDED: The sub-agent reported success.
        FAILED: The sub-agent reported failure.
        ERROR: The delegation tool call itself failed.
    """

    PREPARING = "preparing"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERROR = "error"


_ICONS: dict[DelegationStatus, tuple[str, str]] = {
    DelegationStatus.PREPARING: ("…", "dim"),
    DelegationStatus.RUNNING: ("⟳", "cyan"),
    DelegationStatus.SUCCEEDED: ("✔", "green"),
    DelegationStatus.FAILED: ("✘", "red"),
    DelegationStatus.ERROR: ("✘", "red"),
}


@dataclass(frozen=True)
class NewTaskView:
    """What a delegation row shows.

    Attributes:
        tool_call_id: The delegation tool call id.
        status: Display state.
        agent_name: Display name of the delegate.
        label: Row text.
        session: The session, once one exists.
        error_text: Failure description for ``ERROR`` rows.
    """

    tool_call_id: str
    status: DelegationStatus
    agent_name: str
    label: str
    session: SubAgentSession | None = None
    error_text: str | None = None

    @property
    def clickable(self) -> bool:
        """Whether clicking the row opens a session."""
        return self.session is not None


class NewTaskTool:
    """Adapter between delegation tool calls and the session registry.

    Every notification is checked against the registry before launching:
    a session is started only when none exists for the tool call and the
    tool call is not already completed. Re-dispatching the same
    notification, in any order, never launches twice.

    Args:
        registry: The parent chat's session registry.
        parent_chat_id: Id of the parent conversation.
        agents: Agent definitions available for name lookup.
    """

    def __init__(
        self,
        registry: SubAgentRegistry,
        parent_chat_id: str,
        agents: Sequence[AgentDefinition] = (),
    ) -> None:
        self._registry = registry
        self._parent_chat_id = parent_chat_id
        self._agents = list(agents)

    def handle(self, part: ToolUIPart) -> NewTaskView:
        """Process one state notification of a delegation tool call.

        Args:
            part: The tool call notification.

        Returns:
            The view describing the row after handling.
        """
        task_input = parse_input(NewTaskInput, part.input)

        if part.state is ToolCallState.INPUT_AVAILABLE:
            self._maybe_launch(part, task_input)

        return self.view(part, task_input)

    def view(self, part: ToolUIPart, task_input: NewTaskInput | None = None) -> NewTaskView:
        """Derive the row state for a notification without side effects."""
        if task_input is None:
            task_input = parse_input(NewTaskInput, part.input)
        sub_agent_id = task_input.sub_agent_id if task_input else _raw_agent_id(part)
        agent_name = self.agent_name(sub_agent_id)

        if part.state is ToolCallState.INPUT_STREAMING:
            return NewTaskView(
                tool_call_id=part.tool_call_id,
                status=DelegationStatus.PREPARING,
                agent_name=agent_name,
                label="Preparing to delegate task...",
            )

        session = self._registry.get_session(part.tool_call_id)
        if part.state is ToolCallState.OUTPUT_ERROR and (session is None or session.result is None):
            label = (
                f"{agent_name} could not be started"
                if session is None
                else f"{agent_name} task errored"
            )
            return NewTaskView(
                tool_call_id=part.tool_call_id,
                status=DelegationStatus.ERROR,
                agent_name=agent_name,
                label=label,
                session=session,
                error_text=part.error_text,
            )

        if session is not None:
            if session.result is None:
                status = DelegationStatus.RUNNING
                label = f"{agent_name} working..."
            elif session.result.status == "success":
                status = DelegationStatus.SUCCEEDED
                label = f"{agent_name} completed task"
            else:
                status = DelegationStatus.FAILED
                label = f"{agent_name} failed task"
            return NewTaskView(
                tool_call_id=part.tool_call_id,
                status=status,
                agent_name=agent_name,
                label=label,
                session=session,
            )

        if part.state is ToolCallState.OUTPUT_AVAILABLE:
            return NewTaskView(
                tool_call_id=part.tool_call_id,
                status=DelegationStatus.SUCCEEDED,
                agent_name=agent_name,
                label=f"{agent_name} completed task",
            )
        return NewTaskView(
            tool_call_id=part.tool_call_id,
            status=DelegationStatus.RUNNING,
            agent_name=agent_name,
            label=f"{agent_name} working...",
        )

    def click(self, tool_call_id: str) -> bool:
        """Open the session's pane, if the session exists.

        Returns:
            True if a session was opened.
        """
        if self._registry.get_session(tool_call_id) is None:
            return False
        self._registry.open_session(tool_call_id)
        return True

    def render(self, part: ToolUIPart) -> Text:
        """Render the row for a notification as Rich text."""
        view = self.view(part)
        icon, style = _ICONS[view.status]
        text = Text()
        text.append(f"{icon} ", style=style)
        text.append(view.label, style="dim" if view.status is DelegationStatus.PREPARING else "")
        if view.error_text:
            text.append(f": {view.error_text}", style="red")
        return text

    def agent_name(self, sub_agent_id: str | None) -> str:
        """Display name for an agent id, with the configured fallback."""
        for agent in self._agents:
            if agent.id == sub_agent_id:
                return agent.name
        return self._registry.settings.default_agent_name

    def _maybe_launch(self, part: ToolUIPart, task_input: NewTaskInput | None) -> None:
        if task_input is None:
            logger.debug("Delegation '%s' has incomplete input, not launching", part.tool_call_id)
            return
        if self._registry.get_session(part.tool_call_id) is not None:
            return
        if self._registry.is_tool_call_completed(part.tool_call_id):
            return

        self._registry.start_session(
            self._parent_chat_id,
            part.tool_call_id,
            task_input.sub_agent_id,
            task_input.task,
        )


def _raw_agent_id(part: ToolUIPart) -> str | None:
    """Agent id from partial arguments, for naming rows before validation passes."""
    if not part.input:
        return None
    value = part.input.get("subAgentId", part.input.get("sub_agent_id"))
    return value if isinstance(value, str) else None
