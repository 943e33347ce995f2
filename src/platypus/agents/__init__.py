"""Agent definitions, loading, validation, and system prompts."""

from __future__ import annotations

from platypus.agents.config import AgentDefinition, AssignmentResult
from platypus.agents.loader import discover_agents, load_agent_definition
from platypus.agents.prompts import DEFAULT_AGENT_PROMPT, render_system_prompt
from platypus.agents.validation import validate_sub_agent_assignment

__all__ = [
    "DEFAULT_AGENT_PROMPT",
    "AgentDefinition",
    "AssignmentResult",
    "discover_agents",
    "load_agent_definition",
    "render_system_prompt",
    "validate_sub_agent_assignment",
]
