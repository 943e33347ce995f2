"""End-to-end delegation flow without network access."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from platypus.agents.config import AgentDefinition
from platypus.subagents import (
    PaneContext,
    SubAgentPane,
    SubAgentRegistry,
    make_chat_factory,
    restore_from_transcript,
)
from platypus.tools import DelegationStatus, NewTaskTool, ToolCallState, ToolUIPart

pytestmark = pytest.mark.integration


def _sub_agent_model() -> FunctionModel:
    def respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        last = messages[-1]
        if isinstance(last, ModelRequest) and any(
            isinstance(p, ToolReturnPart) for p in last.parts
        ):
            return ModelResponse(parts=[TextPart("Reported.")])
        return ModelResponse(
            parts=[
                ToolCallPart(
                    "taskResult",
                    {"result": "Platypuses lay eggs.", "status": "success"},
                )
            ]
        )

    return FunctionModel(respond)


class TestDelegationFlow:
    """Delegation from the parent chat through to the sub-agent's result."""

    def test_delegate_run_and_complete(self, agents: list[AgentDefinition]) -> None:
        """A delegation launches a mounted chat whose run completes the session."""
        registry = SubAgentRegistry()
        pane = SubAgentPane(
            registry,
            PaneContext("org-1", "ws-1", agents),
            make_chat_factory(_sub_agent_model(), agents),
        )
        tool = NewTaskTool(registry, "parent-1", agents)
        call = ToolCallPart(
            "newTask",
            {"subAgentId": "agent-42", "task": "Research platypuses"},
            tool_call_id="tool_newTask_abc",
        )

        streaming = tool.handle(
            ToolUIPart("tool_newTask_abc", ToolCallState.INPUT_STREAMING, {"subAgentId": "agent-42"})
        )
        assert streaming.status is DelegationStatus.PREPARING

        running = tool.handle(ToolUIPart.from_tool_call(call))
        assert running.status is DelegationStatus.RUNNING
        assert pane.is_open is True
        assert pane.visible_entry.session.sub_chat_id == "sub_abc"

        pane.get_chat("tool_newTask_abc").run_sync()

        done = tool.view(ToolUIPart.from_tool_call(call, ToolCallState.OUTPUT_AVAILABLE))
        assert done.status is DelegationStatus.SUCCEEDED
        assert done.label == "Researcher completed task"
        assert [s.result.result for s in registry.get_pending_results()] == [
            "Platypuses lay eggs."
        ]

        registry.consume_session("tool_newTask_abc")
        assert registry.get_pending_results() == []

        tool.handle(ToolUIPart.from_tool_call(call))
        assert len(registry) == 1

    def test_reload_does_not_relaunch(
        self,
        agents: list[AgentDefinition],
        delegation_transcript: list[dict[str, Any]],
    ) -> None:
        """After a reload only the unfinished delegation is launched."""
        registry = SubAgentRegistry()
        launched: list[str] = []

        def record(r: SubAgentRegistry) -> None:
            launched.extend(s.tool_call_id for s in r.sessions if s.tool_call_id not in launched)

        registry.subscribe(record)

        restore_from_transcript(registry, "parent-1", delegation_transcript)
        tool = NewTaskTool(registry, "parent-1", agents)
        for message in delegation_transcript:
            for call in message.get("tool_calls", []):
                tool.handle(
                    ToolUIPart(
                        call["id"],
                        ToolCallState.INPUT_AVAILABLE,
                        {"subAgentId": "agent-42", "task": "anything"},
                    )
                )

        assert launched == ["tool_newTask_done", "tool_newTask_open"]
        assert registry.get_session("tool_newTask_done").task == "Research platypuses"
        assert registry.get_session("tool_newTask_open").result is None
        assert registry.active_session_id == "tool_newTask_open"
