"""Agent definition loader.

An agent is described by a markdown file: a YAML header between ``---``
lines holding ``AgentDefinition`` fields, then an optional body used as
the agent's system prompt. The file stem is the agent id unless the
header sets ``id``.

Example file format::

    ---
    name: Researcher
    description: Gathers information from the web
    model: openai:gpt-4o
    sub-agents: [summarizer]
    ---

    You are a research assistant. Your job is to gather information...
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from platypus.agents.config import AgentDefinition
from platypus.subagents.errors import AgentDefinitionError

_DELIMITER = "---"

# Header keys spelled differently from AgentDefinition fields
_FIELD_ALIASES: dict[str, str] = {
    "sub-agents": "sub_agent_ids",
    "sub_agents": "sub_agent_ids",
    "subagents": "sub_agent_ids",
}


def _split_document(source: str, path: Path) -> tuple[str, str]:
    """Return the header and body text of an agent file."""
    lines = source.splitlines()
    if not lines or lines[0].strip() != _DELIMITER:
        raise AgentDefinitionError(
            name=path.stem,
            detail=f"{path} must start with a '---' header line",
        )
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == _DELIMITER:
            return "\n".join(lines[1:index]), "\n".join(lines[index + 1 :])
    raise AgentDefinitionError(name=path.stem, detail=f"Unterminated header in {path}")


def _read_header(header: str, path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise AgentDefinitionError(name=path.stem, detail=f"Malformed YAML header: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise AgentDefinitionError(
            name=path.stem,
            detail=f"Header must be a mapping, not {type(data).__name__}",
        )
    return {_FIELD_ALIASES.get(str(k), str(k).replace("-", "_")): v for k, v in data.items()}


def load_agent_definition(path: Path) -> AgentDefinition:
    """Load one agent definition.

    Args:
        path: Markdown file to read.

    Returns:
        The parsed definition.

    Raises:
        AgentDefinitionError: If the file is unreadable, has no header,
            or its fields do not validate.
    """
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise AgentDefinitionError(name=path.stem, detail=f"Unreadable file: {e}") from e

    header, body = _split_document(source, path)
    fields = _read_header(header, path)
    fields.setdefault("id", path.stem)
    if body.strip():
        fields.setdefault("system_prompt", body.strip())

    try:
        return AgentDefinition.model_validate(fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise AgentDefinitionError(name=str(fields["id"]), detail=problems) from e


def discover_agents(directory: Path) -> list[AgentDefinition]:
    """Load every ``*.md`` agent definition in a directory.

    Args:
        directory: Directory to scan. A missing directory yields no agents.

    Returns:
        Definitions in file name order.

    Raises:
        AgentDefinitionError: If any file is invalid.
    """
    directory = directory.expanduser()
    if not directory.is_dir():
        return []
    return [load_agent_definition(p) for p in sorted(directory.glob("*.md")) if p.is_file()]
