"""Sub-agent assignment validation."""

from __future__ import annotations

from collections.abc import Iterable

from platypus.agents.config import AgentDefinition, AssignmentResult


def validate_sub_agent_assignment(
    agent_id: str,
    sub_agent_ids: list[str],
    workspace_agents: Iterable[AgentDefinition],
) -> AssignmentResult:
    """Check that an agent may delegate to the given sub-agents.

    Agents that have sub-agents of their own may still be assigned as
    sub-agents; nesting is prevented at runtime because a chat running
    in sub-agent mode is never given the delegation tool.

    Args:
        agent_id: The agent being configured.
        sub_agent_ids: Proposed sub-agent ids.
        workspace_agents: Agents that exist in the workspace.

    Returns:
        The validation outcome.
    """
    if agent_id in sub_agent_ids:
        return AssignmentResult(valid=False, error="An agent cannot assign itself as a sub-agent")

    known = {agent.id for agent in workspace_agents}
    if any(sub_id not in known for sub_id in sub_agent_ids):
        return AssignmentResult(valid=False, error="One or more sub-agents not found in workspace")

    return AssignmentResult(valid=True)
