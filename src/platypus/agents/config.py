"""Agent definition models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AgentDefinition(BaseModel):
    """A configured agent in a workspace.

    Attributes:
        id: Unique agent identifier.
        name: Display name.
        description: When to delegate to this agent.
        system_prompt: The agent's own instructions.
        model: Model identifier used to run the agent.
        sub_agent_ids: Agents this agent may delegate to.
    """

    id: str = Field(description="Unique agent identifier")
    name: str = Field(description="Display name")
    description: str | None = Field(
        default=None,
        description="When to delegate to this agent",
    )
    system_prompt: str | None = Field(
        default=None,
        description="Agent instructions",
    )
    model: str | None = Field(
        default=None,
        description="Model identifier",
    )
    sub_agent_ids: list[str] = Field(
        default_factory=list,
        description="Agents this agent may delegate to",
    )


class AssignmentResult(BaseModel):
    """Outcome of validating a sub-agent assignment.

    Attributes:
        valid: Whether the assignment may be saved.
        error: Reason the assignment was rejected.
    """

    valid: bool
    error: str | None = None
