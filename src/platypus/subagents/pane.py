"""Session pane hosting every sub-agent chat at once.

Each session gets one mounted chat that lives as long as the registry
does, so in-flight runs and conversation state survive switching focus.
Only the active session's entry is visible; the rest stay mounted but
hidden.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from platypus.tools.task_result import TaskResultTool

if TYPE_CHECKING:
    from platypus.agents.config import AgentDefinition
    from platypus.subagents.chat import ChatFactory
    from platypus.subagents.config import SubAgentSession
    from platypus.subagents.registry import SubAgentRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaneContext:
    """Read-only host context of the pane.

    Attributes:
        org_id: Organization the parent chat belongs to.
        workspace_id: Workspace the parent chat belongs to.
        agents: Agent definitions, for name lookup.
    """

    org_id: str
    workspace_id: str
    agents: Sequence[AgentDefinition] = field(default_factory=tuple)


@dataclass(frozen=True)
class PaneEntry:
    """One mounted session.

    Attributes:
        session: Current state of the session.
        chat: The session's chat instance.
        completion_tool: Completion adapter bound to the session.
        visible: Whether this is the active entry.
    """

    session: SubAgentSession
    chat: Any
    completion_tool: TaskResultTool
    visible: bool


class SubAgentPane:
    """Keeps one chat mounted per session and exposes the active one.

    Subscribes to the registry and mounts a chat for each session as it
    appears. Mounted chats are dropped only when the registry is cleared.

    Args:
        registry: The parent chat's session registry.
        context: Host context for display.
        chat_factory: Creates the chat for a session and its bound
            completion adapter.
    """

    def __init__(
        self,
        registry: SubAgentRegistry,
        context: PaneContext,
        chat_factory: ChatFactory,
    ) -> None:
        self._registry = registry
        self._context = context
        self._chat_factory = chat_factory
        self._mounted: dict[str, tuple[Any, TaskResultTool]] = {}
        self._unsubscribe = registry.subscribe(self._on_change)
        self._sync()

    @property
    def context(self) -> PaneContext:
        """Host context of the pane."""
        return self._context

    @property
    def is_mounted(self) -> bool:
        """Whether the pane exists at all (at least one session)."""
        return len(self._registry) > 0

    @property
    def is_open(self) -> bool:
        """Whether a session is active."""
        return self._registry.active_session_id is not None

    @property
    def entries(self) -> list[PaneEntry]:
        """Mounted sessions in launch order."""
        active = self._registry.active_session_id
        entries: list[PaneEntry] = []
        for tool_call_id, (chat, completion_tool) in self._mounted.items():
            session = self._registry.get_session(tool_call_id)
            if session is None:
                continue
            entries.append(
                PaneEntry(
                    session=session,
                    chat=chat,
                    completion_tool=completion_tool,
                    visible=tool_call_id == active,
                )
            )
        return entries

    @property
    def visible_entry(self) -> PaneEntry | None:
        """The active entry, if the pane is open."""
        return next((e for e in self.entries if e.visible), None)

    def get_chat(self, tool_call_id: str) -> Any | None:
        """Mounted chat of a session."""
        mounted = self._mounted.get(tool_call_id)
        return mounted[0] if mounted else None

    def agent_name(self, sub_agent_id: str) -> str:
        """Display name for an agent id."""
        for agent in self._context.agents:
            if agent.id == sub_agent_id:
                return agent.name
        return self._registry.settings.default_agent_name

    def close(self) -> None:
        """Detach from the registry. Mounted chats are kept."""
        self._unsubscribe()

    def render(self) -> Panel | None:
        """Render the open pane, or ``None`` when absent or closed."""
        if not self.is_mounted or not self.is_open:
            return None

        session = self._registry.active_session
        if session is None:
            return None

        header = Text()
        header.append("Sub-Agent ", style="bold")
        header.append(self.agent_name(session.sub_agent_id))

        body: list[Any] = [header]
        if session.task:
            body.append(Text("Task:", style="dim"))
            body.append(Text(session.task))

        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("")
        table.add_column("Agent")
        table.add_column("Status")
        for entry in self.entries:
            table.add_row(
                "▶" if entry.visible else "",
                self.agent_name(entry.session.sub_agent_id),
                _status_label(entry.session),
            )
        body.append(table)

        return Panel(Group(*body), title=session.sub_chat_id, expand=False)

    def _on_change(self, registry: SubAgentRegistry) -> None:
        self._sync()

    def _sync(self) -> None:
        live = {s.tool_call_id for s in self._registry.sessions}
        for tool_call_id in [t for t in self._mounted if t not in live]:
            del self._mounted[tool_call_id]

        for session in self._registry.sessions:
            if session.tool_call_id in self._mounted:
                continue
            completion_tool = TaskResultTool(self._registry, session.tool_call_id)
            chat = self._chat_factory(session, completion_tool)
            self._mounted[session.tool_call_id] = (chat, completion_tool)
            logger.debug("Mounted chat '%s' for session '%s'", session.sub_chat_id, session.tool_call_id)


def _status_label(session: SubAgentSession) -> str:
    if session.result is None:
        return "running"
    return "completed" if session.result.succeeded else "failed"
