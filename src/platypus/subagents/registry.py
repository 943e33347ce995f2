"""Process-local registry of sub-agent sessions.

One registry belongs to one parent chat view. It is created when that
view is set up and discarded (or cleared) when it goes away, and it is
handed explicitly to the tool adapters and the session pane.

All mutations are synchronous. Repeated notifications for the same tool
call are absorbed by existence checks, so ``start_session`` can be called
from any number of re-dispatches without creating duplicate sessions.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from platypus.config.subagents import SubAgentSettings
from platypus.subagents.config import SubAgentSession, TaskResult, to_sub_chat_id
from platypus.subagents.errors import InvalidToolCallError, SessionNotFoundError

logger = logging.getLogger(__name__)

RegistryListener = Callable[["SubAgentRegistry"], None]

# Placeholder result for sessions rebuilt from a persisted transcript.
# The actual result text lives in the parent transcript, not here.
_RESTORED_RESULT = TaskResult(status="success", result="")


class SubAgentRegistry:
    """Ordered mapping of delegation tool call ids to sessions.

    Holds the launch-ordered sessions, the active session pointer that
    drives pane visibility, and the set of tool calls known to be
    completed (restored from history or consumed by the parent chat).

    Example::

        registry = SubAgentRegistry()
        registry.start_session("parent-c1", "tc-1", "agent-42", "Summarize the doc")
        registry.complete_session("tc-1", TaskResult(status="success", result="Done."))
        registry.get_session("tc-1").result.result  # "Done."

    Args:
        settings: Sub-agent behaviour settings. Defaults to ``SubAgentSettings()``.
    """

    def __init__(self, settings: SubAgentSettings | None = None) -> None:
        self._settings = settings or SubAgentSettings()
        self._sessions: dict[str, SubAgentSession] = {}
        self._active_session_id: str | None = None
        self._completed_tool_calls: set[str] = set()
        self._listeners: list[RegistryListener] = []

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start_session(
        self,
        parent_chat_id: str,
        tool_call_id: str,
        sub_agent_id: str,
        task: str,
    ) -> None:
        """Create a session for a delegation tool call.

        A no-op if a session already exists for ``tool_call_id`` or the
        tool call is already known to be completed. The first call's
        fields are kept.

        Args:
            parent_chat_id: Conversation that issued the delegation.
            tool_call_id: Id of the delegation tool call.
            sub_agent_id: Agent definition to run as the delegate.
            task: Instruction text for the sub-agent.

        Raises:
            InvalidToolCallError: If ``tool_call_id`` is empty.
        """
        _require_tool_call_id(tool_call_id)

        if tool_call_id in self._completed_tool_calls:
            logger.debug("Tool call '%s' already completed, not starting", tool_call_id)
            return
        if tool_call_id in self._sessions:
            logger.debug("Session '%s' already started, ignoring duplicate", tool_call_id)
            return

        self._sessions[tool_call_id] = self._new_session(
            parent_chat_id, tool_call_id, sub_agent_id, task
        )
        if self._settings.auto_open:
            self._active_session_id = tool_call_id

        logger.debug(
            "Started sub-agent session '%s' (agent=%s, chat=%s)",
            tool_call_id,
            sub_agent_id,
            self._sessions[tool_call_id].sub_chat_id,
        )
        self._notify()

    def restore_session(
        self,
        parent_chat_id: str,
        tool_call_id: str,
        sub_agent_id: str,
        task: str,
    ) -> None:
        """Rebuild a session for a delegation already completed in history.

        Marks the tool call completed before anything else, so adapters
        handling the same tool call afterwards never launch it again.
        Existing sessions are left untouched.

        Args:
            parent_chat_id: Conversation that issued the delegation.
            tool_call_id: Id of the delegation tool call.
            sub_agent_id: Agent definition that ran as the delegate.
            task: Instruction text the sub-agent was given.

        Raises:
            InvalidToolCallError: If ``tool_call_id`` is empty.
        """
        _require_tool_call_id(tool_call_id)

        self._completed_tool_calls.add(tool_call_id)
        if tool_call_id in self._sessions:
            return

        self._sessions[tool_call_id] = self._new_session(
            parent_chat_id, tool_call_id, sub_agent_id, task, result=_RESTORED_RESULT
        )
        logger.debug("Restored completed sub-agent session '%s'", tool_call_id)
        self._notify()

    def complete_session(self, tool_call_id: str, result: TaskResult) -> None:
        """Record a session's result.

        Only the first result is kept; later calls are ignored. Completing
        one session never touches any other.

        Args:
            tool_call_id: Id of the delegation tool call.
            result: The sub-agent's reported outcome.

        Raises:
            SessionNotFoundError: If no session exists and
                ``strict_completion`` is enabled.
        """
        session = self._sessions.get(tool_call_id)
        if session is None:
            if self._settings.strict_completion:
                raise SessionNotFoundError(
                    tool_call_id=tool_call_id,
                    available=list(self._sessions),
                )
            logger.warning("Completion for unknown sub-agent session '%s' ignored", tool_call_id)
            return

        if session.result is not None:
            logger.debug("Session '%s' already completed, keeping first result", tool_call_id)
            return

        self._sessions[tool_call_id] = dataclasses.replace(session, result=result)
        logger.debug("Completed sub-agent session '%s' with status %s", tool_call_id, result.status)
        self._notify()

    def consume_session(self, tool_call_id: str) -> None:
        """Mark a tool call as fully processed.

        Called once the session's result has been fed back to the parent
        chat. Consumed tool calls are never launched again.

        Args:
            tool_call_id: Id of the delegation tool call.
        """
        self._completed_tool_calls.add(tool_call_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_session(self, tool_call_id: str) -> SubAgentSession | None:
        """Look up a session by tool call id."""
        return self._sessions.get(tool_call_id)

    def is_tool_call_completed(self, tool_call_id: str) -> bool:
        """Whether a delegation tool call has already finished.

        True if its session holds a result, or the tool call was restored
        from history or consumed, even when no session object exists.
        """
        if tool_call_id in self._completed_tool_calls:
            return True
        session = self._sessions.get(tool_call_id)
        return session is not None and session.result is not None

    def get_completed_sessions(self) -> list[SubAgentSession]:
        """Sessions that hold a result, in launch order."""
        return [s for s in self._sessions.values() if s.result is not None]

    def get_pending_results(self) -> list[SubAgentSession]:
        """Completed sessions whose result has not been consumed yet."""
        return [
            s
            for s in self._sessions.values()
            if s.result is not None and s.tool_call_id not in self._completed_tool_calls
        ]

    @property
    def sessions(self) -> list[SubAgentSession]:
        """All sessions in launch order."""
        return list(self._sessions.values())

    @property
    def settings(self) -> SubAgentSettings:
        """Settings this registry was created with."""
        return self._settings

    # ------------------------------------------------------------------
    # Pane visibility
    # ------------------------------------------------------------------

    def open_session(self, tool_call_id: str) -> None:
        """Make a session the active one. No-op for unknown ids."""
        if tool_call_id not in self._sessions:
            logger.debug("Cannot open unknown sub-agent session '%s'", tool_call_id)
            return
        if self._active_session_id != tool_call_id:
            self._active_session_id = tool_call_id
            self._notify()

    def close_pane(self) -> None:
        """Deactivate the active session without discarding any session."""
        if self._active_session_id is not None:
            self._active_session_id = None
            self._notify()

    @property
    def active_session_id(self) -> str | None:
        """Tool call id of the visible session, or ``None`` if the pane is closed."""
        return self._active_session_id

    @property
    def active_session(self) -> SubAgentSession | None:
        """The visible session, if any."""
        if self._active_session_id is None:
            return None
        return self._sessions.get(self._active_session_id)

    # ------------------------------------------------------------------
    # Subscription & teardown
    # ------------------------------------------------------------------

    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        """Register a callback invoked after every state change.

        Args:
            listener: Callable receiving this registry.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        """Discard every session and completion marker.

        Used when the parent chat view this registry belongs to goes away.
        """
        self._sessions.clear()
        self._completed_tool_calls.clear()
        self._active_session_id = None
        logger.debug("Cleared sub-agent registry")
        self._notify()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _new_session(
        self,
        parent_chat_id: str,
        tool_call_id: str,
        sub_agent_id: str,
        task: str,
        result: TaskResult | None = None,
    ) -> SubAgentSession:
        return SubAgentSession(
            tool_call_id=tool_call_id,
            parent_chat_id=parent_chat_id,
            sub_agent_id=sub_agent_id,
            sub_chat_id=to_sub_chat_id(
                tool_call_id,
                tool_call_prefix=self._settings.tool_call_prefix,
                sub_chat_prefix=self._settings.sub_chat_prefix,
            ),
            task=task,
            result=result,
        )

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Dunder methods
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        """Return the number of sessions."""
        return len(self._sessions)

    def __contains__(self, tool_call_id: object) -> bool:
        """Whether a session exists for the tool call id."""
        return tool_call_id in self._sessions

    def __repr__(self) -> str:
        """Return a string representation of the registry."""
        completed = len(self.get_completed_sessions())
        return (
            f"SubAgentRegistry(sessions={len(self._sessions)}, completed={completed}, "
            f"active={self._active_session_id!r})"
        )


def _require_tool_call_id(tool_call_id: str) -> None:
    """Raise if the tool call id is empty."""
    if not tool_call_id or not tool_call_id.strip():
        raise InvalidToolCallError(tool_call_id, "tool call id must not be empty")
