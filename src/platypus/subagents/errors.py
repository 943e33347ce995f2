"""Sub-agent session exceptions."""

from __future__ import annotations


class SubAgentError(Exception):
    """A delegation session could not be resolved or driven forward.

    Subclasses name the session problem: a tool call id with no session,
    an adapter wired without its session, or a bad agent definition.

    Attributes:
        message: Description of the session problem.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class SessionNotFoundError(SubAgentError):
    """Raised when a session is referenced that the registry does not hold.

    Attributes:
        tool_call_id: Tool call id that has no session.
        available: Tool call ids of the sessions that do exist, if known.
    """

    def __init__(
        self,
        tool_call_id: str,
        available: list[str] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            tool_call_id: Tool call id that has no session.
            available: Tool call ids of the sessions that do exist, if known.
        """
        self.tool_call_id = tool_call_id
        self.available = list(available) if available is not None else None
        available_str = ""
        if self.available is not None:
            available_str = f" Known sessions: {', '.join(self.available) or 'none'}"
        super().__init__(f"No sub-agent session for tool call '{tool_call_id}'.{available_str}")

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(tool_call_id={self.tool_call_id!r}, "
            f"available={self.available!r})"
        )

    def __reduce__(self) -> tuple:
        """Support pickling with custom constructor arguments."""
        return (type(self), (self.tool_call_id, self.available))


class SessionContextError(SubAgentError):
    """Raised when a component is wired up without its owning session.

    A completion adapter that does not know its session cannot report
    a result.

    Attributes:
        component: Name of the component that was missing its session.
    """

    def __init__(self, component: str) -> None:
        self.component = component
        super().__init__(f"{component} must be bound to a sub-agent session tool call id")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(component={self.component!r})"

    def __reduce__(self) -> tuple:
        return (type(self), (self.component,))


class InvalidToolCallError(SubAgentError):
    """Raised when a tool call notification cannot identify a session.

    Attributes:
        tool_call_id: The offending tool call id (may be empty).
        detail: Description of the problem.
    """

    def __init__(self, tool_call_id: str, detail: str) -> None:
        self.tool_call_id = tool_call_id
        self.detail = detail
        super().__init__(f"Invalid tool call {tool_call_id!r}: {detail}")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(tool_call_id={self.tool_call_id!r}, detail={self.detail!r})"
        )

    def __reduce__(self) -> tuple:
        return (type(self), (self.tool_call_id, self.detail))


class AgentDefinitionError(SubAgentError):
    """Raised when an agent definition file is invalid.

    Attributes:
        name: Agent name (or file stem) with the invalid definition.
        detail: Description of the problem.
    """

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Invalid definition for agent '{name}': {detail}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, detail={self.detail!r})"

    def __reduce__(self) -> tuple:
        return (type(self), (self.name, self.detail))
