"""System prompt rendering for parent agents and sub-agents."""

from __future__ import annotations

from collections.abc import Sequence

from jinja2 import Environment, StrictUndefined

from platypus.agents.config import AgentDefinition

DEFAULT_AGENT_PROMPT = "You are a helpful AI assistant."

_env = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True)

_SUB_AGENT_MODE = _env.from_string(
    """\
## Important: Sub-Agent Mode

You are running as a sub-agent delegated a specific task.

CRITICAL INSTRUCTIONS:
- Focus ONLY on the task you have been assigned
- When you have completed the task, you MUST call the `{{ completion_tool }}` tool
- The `{{ completion_tool }}` tool is the ONLY way to return control to the parent agent
- Include all relevant findings and outputs in your result
- Set status to "success" if you completed the task, "error" if you could not"""
)

_AVAILABLE_SUB_AGENTS = _env.from_string(
    """\
## Available Sub-Agents

You can delegate specialized tasks to the following sub-agents using the `{{ delegation_tool }}` tool:

{% for agent in sub_agents %}
- **{{ agent.name }}** (ID: {{ agent.id }}): {{ agent.description or "No description provided" }}
{% endfor %}

When delegating to a sub-agent:
1. Each task description MUST be entirely self-contained. Sub-agents cannot see the parent \
conversation, other sub-agent tasks, or any prior context.
2. Include all relevant information, constraints, and requirements directly in the task description
3. If delegating multiple related tasks, make each task independently understandable
4. Wait for the sub-agent to complete before continuing
5. Use the result returned by the sub-agent to continue your work"""
)


def render_system_prompt(
    agent_system_prompt: str | None = None,
    *,
    sub_agents: Sequence[AgentDefinition] = (),
    is_sub_agent_mode: bool = False,
    delegation_tool: str = "newTask",
    completion_tool: str = "taskResult",
) -> str:
    """Assemble an agent's system prompt.

    Args:
        agent_system_prompt: The agent's own instructions. Falls back to
            a generic assistant prompt when empty.
        sub_agents: Agents the prompted agent may delegate to. Ignored in
            sub-agent mode, where delegation is not available.
        is_sub_agent_mode: Whether the agent runs as a delegate.
        delegation_tool: Name of the delegation tool.
        completion_tool: Name of the completion tool.

    Returns:
        The rendered system prompt.
    """
    parts: list[str] = []

    if is_sub_agent_mode:
        parts.append(_SUB_AGENT_MODE.render(completion_tool=completion_tool))

    parts.append((agent_system_prompt or "").strip() or DEFAULT_AGENT_PROMPT)

    if sub_agents and not is_sub_agent_mode:
        parts.append(
            _AVAILABLE_SUB_AGENTS.render(
                sub_agents=sub_agents,
                delegation_tool=delegation_tool,
            ).strip()
        )

    return "\n\n".join(p for p in parts if p)
