"""Tests for the delegation tool adapter."""

from __future__ import annotations

import pytest

from platypus.agents.config import AgentDefinition
from platypus.subagents.config import TaskResult
from platypus.subagents.registry import SubAgentRegistry
from platypus.tools.lifecycle import ToolCallState
from platypus.tools.new_task import DelegationStatus, NewTaskTool

TASK = {"subAgentId": "agent-42", "task": "Research platypuses"}


@pytest.fixture
def tool(registry: SubAgentRegistry, agents: list[AgentDefinition]) -> NewTaskTool:
    """Provide a delegation adapter for chat ``parent-1``."""
    return NewTaskTool(registry, "parent-1", agents)


class TestLaunch:
    """Tests for session launching."""

    def test_input_available_starts_session(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """Final arguments start exactly one session."""
        view = tool.handle(make_part("tc-1", **TASK))

        session = registry.get_session("tc-1")
        assert session.parent_chat_id == "parent-1"
        assert session.sub_agent_id == "agent-42"
        assert session.task == "Research platypuses"
        assert view.status is DelegationStatus.RUNNING
        assert view.label == "Researcher working..."
        assert view.clickable is True

    def test_repeated_notifications_launch_once(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """Re-dispatching the same notification never launches twice."""
        calls: list[int] = []
        registry.subscribe(lambda r: calls.append(len(r)))

        for _ in range(3):
            tool.handle(make_part("tc-1", **TASK))

        assert len(registry) == 1
        assert calls == [1]

    def test_streaming_does_not_launch(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """Streaming arguments only show the preparing row."""
        view = tool.handle(make_part("tc-1", ToolCallState.INPUT_STREAMING, subAgentId="agent-42"))

        assert len(registry) == 0
        assert view.status is DelegationStatus.PREPARING
        assert view.label == "Preparing to delegate task..."
        assert view.clickable is False

    def test_incomplete_input_does_not_launch(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """Input missing the task is not launched."""
        tool.handle(make_part("tc-1", subAgentId="agent-42"))

        assert len(registry) == 0

    def test_restored_tool_call_not_relaunched(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """A tool call restored from history keeps its restored session."""
        registry.restore_session("parent-1", "tc-1", "agent-42", "Research platypuses")

        view = tool.handle(make_part("tc-1", **TASK))

        assert len(registry) == 1
        assert view.status is DelegationStatus.SUCCEEDED

    def test_consumed_tool_call_not_relaunched(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """A consumed tool call without a session is never started."""
        registry.consume_session("tc-1")

        tool.handle(make_part("tc-1", **TASK))

        assert registry.get_session("tc-1") is None

    def test_output_states_do_not_launch(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """Only input-available launches."""
        tool.handle(make_part("tc-1", ToolCallState.OUTPUT_AVAILABLE, **TASK))

        assert len(registry) == 0


class TestView:
    """Tests for row states."""

    def test_completed_session(self, tool: NewTaskTool, registry: SubAgentRegistry, make_part) -> None:
        """A succeeded session shows a completed row."""
        tool.handle(make_part("tc-1", **TASK))
        registry.complete_session("tc-1", TaskResult(status="success", result="ok"))

        view = tool.view(make_part("tc-1", ToolCallState.OUTPUT_AVAILABLE, **TASK))

        assert view.status is DelegationStatus.SUCCEEDED
        assert view.label == "Researcher completed task"

    def test_failed_session(self, tool: NewTaskTool, registry: SubAgentRegistry, make_part) -> None:
        """An error result shows a failed row."""
        tool.handle(make_part("tc-1", **TASK))
        registry.complete_session("tc-1", TaskResult(status="error", result="no"))

        view = tool.view(make_part("tc-1", **TASK))

        assert view.status is DelegationStatus.FAILED
        assert view.label == "Researcher failed task"

    def test_output_error_without_session(self, tool: NewTaskTool, make_part) -> None:
        """A failed tool call shows its error text."""
        view = tool.handle(
            make_part("tc-1", ToolCallState.OUTPUT_ERROR, error_text="boom", subAgentId="agent-7")
        )

        assert view.status is DelegationStatus.ERROR
        assert view.label == "Summarizer could not be started"
        assert view.error_text == "boom"
        assert view.clickable is False

    def test_output_error_after_launch(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """A delegation call failing after launch shows a clickable error row."""
        tool.handle(make_part("tc-1", **TASK))

        view = tool.handle(make_part("tc-1", ToolCallState.OUTPUT_ERROR, error_text="boom", **TASK))

        assert view.status is DelegationStatus.ERROR
        assert view.label == "Researcher task errored"
        assert view.error_text == "boom"
        assert view.session is registry.get_session("tc-1")
        assert view.clickable is True

    def test_recorded_result_wins_over_output_error(
        self, tool: NewTaskTool, registry: SubAgentRegistry, make_part
    ) -> None:
        """A session that already reported keeps its result status."""
        tool.handle(make_part("tc-1", **TASK))
        registry.complete_session("tc-1", TaskResult(status="success", result="ok"))

        view = tool.handle(make_part("tc-1", ToolCallState.OUTPUT_ERROR, error_text="boom", **TASK))

        assert view.status is DelegationStatus.SUCCEEDED

    def test_unknown_agent_fallback_name(self, tool: NewTaskTool, make_part) -> None:
        """Unknown agents use the fallback name."""
        view = tool.handle(make_part("tc-1", subAgentId="ghost", task="t"))

        assert view.agent_name == "Sub-agent"
        assert view.label == "Sub-agent working..."

    def test_render(self, tool: NewTaskTool, make_part) -> None:
        """Rows render as text with the label."""
        text = tool.render(
            make_part("tc-1", ToolCallState.OUTPUT_ERROR, error_text="boom", **TASK)
        )

        assert text.plain == "✘ Researcher could not be started: boom"


class TestClick:
    """Tests for click."""

    def test_click_opens_session(self, tool: NewTaskTool, registry: SubAgentRegistry, make_part) -> None:
        """Clicking a row re-opens its session."""
        tool.handle(make_part("tc-1", **TASK))
        registry.close_pane()

        assert tool.click("tc-1") is True
        assert registry.active_session_id == "tc-1"

    def test_click_without_session(self, tool: NewTaskTool, registry: SubAgentRegistry) -> None:
        """Clicking a row without a session does nothing."""
        assert tool.click("tc-1") is False
        assert registry.active_session_id is None
