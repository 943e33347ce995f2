"""Shared test fixtures and configuration for platypus tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from pydantic_ai import models
from pydantic_ai.models.test import TestModel

from platypus.agents.config import AgentDefinition
from platypus.config.subagents import SubAgentSettings
from platypus.subagents.registry import SubAgentRegistry
from platypus.tools.lifecycle import ToolCallState, ToolUIPart

# Block all real model requests globally for safety
models.ALLOW_MODEL_REQUESTS = False


@pytest.fixture
def test_model() -> TestModel:
    """Provide a TestModel for deterministic testing."""
    return TestModel()


@pytest.fixture
def registry() -> SubAgentRegistry:
    """Provide an empty registry with default settings."""
    return SubAgentRegistry()


@pytest.fixture
def strict_registry() -> SubAgentRegistry:
    """Provide a registry that raises on completions for unknown sessions."""
    return SubAgentRegistry(SubAgentSettings(strict_completion=True))


@pytest.fixture
def agents() -> list[AgentDefinition]:
    """Provide a small set of workspace agents."""
    return [
        AgentDefinition(
            id="agent-42",
            name="Researcher",
            description="Gathers information",
            system_prompt="You research things thoroughly.",
        ),
        AgentDefinition(id="agent-7", name="Summarizer", description="Writes summaries"),
    ]


@pytest.fixture
def make_part():
    """Factory fixture building tool call notifications.

    Usage:
        def test_something(make_part):
            part = make_part("tc-1", ToolCallState.INPUT_AVAILABLE, subAgentId="a", task="t")
    """

    def _make(
        tool_call_id: str,
        state: ToolCallState = ToolCallState.INPUT_AVAILABLE,
        *,
        error_text: str | None = None,
        **input_fields: Any,
    ) -> ToolUIPart:
        return ToolUIPart(
            tool_call_id=tool_call_id,
            state=state,
            input=dict(input_fields) or None,
            error_text=error_text,
        )

    return _make


@pytest.fixture
def delegation_transcript() -> list[dict[str, Any]]:
    """Provide a persisted parent transcript with one finished and one open delegation."""
    return [
        {"role": "user", "content": "Research platypuses and summarize."},
        {
            "role": "assistant",
            "content": "Delegating.",
            "tool_calls": [
                {
                    "id": "tool_newTask_done",
                    "type": "function",
                    "function": {
                        "name": "newTask",
                        "arguments": '{"subAgentId": "agent-42", "task": "Research platypuses"}',
                    },
                },
                {
                    "id": "tool_newTask_open",
                    "type": "function",
                    "function": {
                        "name": "newTask",
                        "arguments": '{"subAgentId": "agent-7", "task": "Summarize findings"}',
                    },
                },
            ],
        },
        {
            "role": "tool",
            "tool_call_id": "tool_newTask_done",
            "content": "Platypuses are egg-laying mammals.",
        },
    ]


@pytest.fixture
def sample_agent_dir(tmp_path: Path) -> Path:
    """Create a temporary directory with agent definition ``.md`` files.

    Structure::

        agents/
            researcher.md  (frontmatter and body)
            summarizer.md  (minimal, explicit id)
    """
    agents_dir = tmp_path / "agents"
    agents_dir.mkdir()

    (agents_dir / "researcher.md").write_text(
        "---\nname: Researcher\ndescription: Gathers information\n"
        "sub-agents: [summarizer]\n---\n\nYou are a research assistant.\n",
        encoding="utf-8",
    )
    (agents_dir / "summarizer.md").write_text(
        "---\nid: agent-7\nname: Summarizer\n---\n",
        encoding="utf-8",
    )
    return agents_dir


# Marker for integration tests
def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (may require external services)",
    )
