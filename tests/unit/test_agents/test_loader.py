"""Tests for the agent definition loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from platypus.agents.loader import discover_agents, load_agent_definition
from platypus.subagents.errors import AgentDefinitionError


class TestLoadAgentDefinition:
    """Tests for load_agent_definition."""

    def test_frontmatter_and_body(self, sample_agent_dir: Path) -> None:
        """Frontmatter fields and the body prompt are loaded."""
        agent = load_agent_definition(sample_agent_dir / "researcher.md")

        assert agent.id == "researcher"
        assert agent.name == "Researcher"
        assert agent.description == "Gathers information"
        assert agent.sub_agent_ids == ["summarizer"]
        assert agent.system_prompt == "You are a research assistant."

    def test_explicit_id_without_body(self, sample_agent_dir: Path) -> None:
        """An explicit id wins over the file stem; no body means no prompt."""
        agent = load_agent_definition(sample_agent_dir / "summarizer.md")

        assert agent.id == "agent-7"
        assert agent.system_prompt is None

    def test_missing_frontmatter(self, tmp_path: Path) -> None:
        """Files without a header are rejected."""
        path = tmp_path / "plain.md"
        path.write_text("Just text.\n", encoding="utf-8")

        with pytest.raises(AgentDefinitionError, match="must start with a '---' header"):
            load_agent_definition(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML is reported."""
        path = tmp_path / "broken.md"
        path.write_text("---\nname: [unclosed\n---\n", encoding="utf-8")

        with pytest.raises(AgentDefinitionError, match="Malformed YAML header"):
            load_agent_definition(path)

    def test_non_mapping_frontmatter(self, tmp_path: Path) -> None:
        """The header must be a mapping."""
        path = tmp_path / "list.md"
        path.write_text("---\n- a\n- b\n---\n", encoding="utf-8")

        with pytest.raises(AgentDefinitionError, match="Header must be a mapping"):
            load_agent_definition(path)

    def test_missing_name(self, tmp_path: Path) -> None:
        """Validation failures are wrapped."""
        path = tmp_path / "nameless.md"
        path.write_text("---\ndescription: x\n---\n", encoding="utf-8")

        with pytest.raises(AgentDefinitionError, match="name: Field required") as exc_info:
            load_agent_definition(path)

        assert exc_info.value.name == "nameless"

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """A missing file is reported as a definition error."""
        with pytest.raises(AgentDefinitionError, match="Unreadable file"):
            load_agent_definition(tmp_path / "missing.md")


class TestDiscoverAgents:
    """Tests for discover_agents."""

    def test_discovers_sorted(self, sample_agent_dir: Path) -> None:
        """All definitions are loaded in file name order."""
        agents = discover_agents(sample_agent_dir)

        assert [a.id for a in agents] == ["researcher", "agent-7"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory yields no agents."""
        assert discover_agents(tmp_path / "nope") == []

    def test_ignores_other_files(self, sample_agent_dir: Path) -> None:
        """Only markdown files are loaded."""
        (sample_agent_dir / "notes.txt").write_text("ignore me", encoding="utf-8")

        assert len(discover_agents(sample_agent_dir)) == 2


class TestHeaderParsing:
    """Tests for header edge cases."""

    def test_unterminated_header(self, tmp_path: Path) -> None:
        """A header without a closing delimiter is rejected."""
        path = tmp_path / "open.md"
        path.write_text("---\nname: Open\n", encoding="utf-8")

        with pytest.raises(AgentDefinitionError, match="Unterminated header"):
            load_agent_definition(path)

    def test_header_prompt_wins_over_body(self, tmp_path: Path) -> None:
        """An explicit system-prompt key takes precedence over the body."""
        path = tmp_path / "writer.md"
        path.write_text(
            "---\nname: Writer\nsystem-prompt: Write tersely.\n---\nIgnored body.\n",
            encoding="utf-8",
        )

        assert load_agent_definition(path).system_prompt == "Write tersely."
