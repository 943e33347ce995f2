"""Sub-agent chat runner built on pydantic-ai.

A ``SubAgentChat`` runs one session's delegate in *sub-agent mode*: the
system prompt tells the model to finish by calling the completion tool,
and that tool reports through the session's ``TaskResultTool``.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from pydantic_ai import Agent as PydanticAgent
from pydantic_ai import ModelRetry, RunContext

from platypus.agents.prompts import render_system_prompt
from platypus.config.subagents import SubAgentSettings
from platypus.subagents.config import SubAgentSession, TaskStatus
from platypus.subagents.errors import SessionContextError, SubAgentError
from platypus.tools.lifecycle import ToolCallState, ToolUIPart

if TYPE_CHECKING:
    from pydantic_ai.messages import ModelMessage
    from pydantic_ai.models import Model

    from platypus.agents.config import AgentDefinition
    from platypus.tools.task_result import TaskResultTool

logger = logging.getLogger(__name__)

ChatFactory = Callable[[SubAgentSession, "TaskResultTool"], "SubAgentChat"]


class SubAgentChat:
    """The conversation a sub-agent runs in.

    Never given the delegation tool, so sub-agents cannot delegate
    further. Message history is kept across runs.

    Args:
        session: The session this chat belongs to.
        completion_tool: Adapter bound to the same session.
        model: Model identifier or pydantic-ai ``Model`` instance.
        agent: Definition of the delegate, for its instructions.
        settings: Sub-agent settings, for tool naming.

    Raises:
        SessionContextError: If ``completion_tool`` belongs to another session.
    """

    def __init__(
        self,
        session: SubAgentSession,
        completion_tool: TaskResultTool,
        model: str | Model,
        *,
        agent: AgentDefinition | None = None,
        settings: SubAgentSettings | None = None,
    ) -> None:
        if completion_tool.tool_call_id != session.tool_call_id:
            raise SessionContextError("SubAgentChat")

        self._session = session
        self._model = model
        self._completion_tool = completion_tool
        self._settings = settings or SubAgentSettings()
        self._messages: list[ModelMessage] = []
        self._call_ids = itertools.count(1)

        system_prompt = render_system_prompt(
            agent.system_prompt if agent else None,
            is_sub_agent_mode=True,
            completion_tool=self._settings.completion_tool_name,
        )
        self._agent: PydanticAgent[None, str] = PydanticAgent(model, system_prompt=system_prompt)
        self._agent.tool(self._report_result, name=self._settings.completion_tool_name)

    async def run(self, prompt: str | None = None) -> str:
        """Run one turn of the sub-agent conversation.

        Args:
            prompt: User prompt. The first turn defaults to the session task.

        Returns:
            The model's text output.

        Raises:
            SubAgentError: If no prompt is given after the first turn.
        """
        result = await self._agent.run(
            self._resolve_prompt(prompt),
            message_history=self._messages or None,
        )
        self._messages = result.all_messages()
        return result.output

    def run_sync(self, prompt: str | None = None) -> str:
        """Run one turn synchronously. See ``run``."""
        result = self._agent.run_sync(
            self._resolve_prompt(prompt),
            message_history=self._messages or None,
        )
        self._messages = result.all_messages()
        return result.output

    @property
    def session(self) -> SubAgentSession:
        """The session as it was when this chat was created."""
        return self._session

    @property
    def model(self) -> str | Model:
        """The model this chat runs on."""
        return self._model

    @property
    def chat_id(self) -> str:
        """Id of the sub-agent conversation."""
        return self._session.sub_chat_id

    @property
    def messages(self) -> list[ModelMessage]:
        """Conversation history so far."""
        return list(self._messages)

    def _resolve_prompt(self, prompt: str | None) -> str:
        if prompt:
            return prompt
        if not self._messages:
            return self._session.task
        raise SubAgentError(f"Chat '{self.chat_id}' needs a prompt to continue")

    def _report_result(self, ctx: RunContext[None], result: str, status: TaskStatus) -> str:
        """Report the outcome of your task to the parent agent.

        This is the only way to return control.

        Args:
            result: All relevant findings and outputs of the task.
            status: "success" if you completed the task, "error" if you could not.
        """
        call_id = ctx.tool_call_id or f"{self._settings.completion_tool_name}-{next(self._call_ids)}"
        part = ToolUIPart(
            tool_call_id=call_id,
            state=ToolCallState.INPUT_AVAILABLE,
            input={"result": result, "status": status},
            tool_name=self._settings.completion_tool_name,
        )
        if self._completion_tool.handle(part) is None:
            raise ModelRetry("The result must not be empty.")
        return "Task result recorded."


def make_chat_factory(
    model: str | Model,
    agents: Sequence[AgentDefinition] = (),
    settings: SubAgentSettings | None = None,
) -> ChatFactory:
    """Build a pane chat factory creating one ``SubAgentChat`` per session.

    Args:
        model: Default model identifier or pydantic-ai ``Model`` instance.
        agents: Definitions looked up by each session's ``sub_agent_id``.
            A definition's own ``model`` takes precedence over ``model``.
        settings: Sub-agent settings.

    Returns:
        A factory creating a ``SubAgentChat`` per session.
    """
    by_id = {agent.id: agent for agent in agents}

    def factory(session: SubAgentSession, completion_tool: TaskResultTool) -> SubAgentChat:
        agent = by_id.get(session.sub_agent_id)
        if agent is None:
            logger.warning("Unknown sub-agent '%s', using default instructions", session.sub_agent_id)
        chat_model = agent.model if agent is not None and agent.model else model
        return SubAgentChat(session, completion_tool, chat_model, agent=agent, settings=settings)

    return factory
