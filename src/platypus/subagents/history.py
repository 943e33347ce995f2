"""Restore sub-agent sessions from a persisted parent transcript.

When a parent chat is reloaded, its delegation tool calls reappear and
would be launched again. A delegation counts as completed when the
transcript holds a tool result for its call id. Those are restored into
the registry before any adapter handles the tool calls.

Both OpenAI-style message dicts and pydantic-ai ``ModelMessage`` objects
are accepted.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic_ai.messages import ModelRequest, ModelResponse, ToolCallPart, ToolReturnPart

if TYPE_CHECKING:
    from pydantic_ai.messages import ModelMessage

    from platypus.subagents.registry import SubAgentRegistry

logger = logging.getLogger(__name__)


@dataclass
class DelegationRecord:
    """A delegation tool call found in a transcript.

    Attributes:
        tool_call_id: Id of the delegation tool call.
        sub_agent_id: Agent the task was delegated to.
        task: Instruction text handed to the sub-agent.
        completed: Whether the transcript holds a result for the call.
    """

    tool_call_id: str
    sub_agent_id: str
    task: str
    completed: bool = False


def find_delegations(
    messages: Iterable[dict[str, Any] | ModelMessage],
    tool_name: str = "newTask",
) -> list[DelegationRecord]:
    """Collect delegation tool calls from a transcript, in order.

    Args:
        messages: Message dicts or pydantic-ai messages.
        tool_name: Name of the delegation tool.

    Returns:
        One record per delegation tool call.
    """
    records: dict[str, DelegationRecord] = {}
    answered: set[str] = set()

    for message in messages:
        if isinstance(message, dict):
            _scan_dict(message, tool_name, records, answered)
        elif isinstance(message, ModelResponse):
            for part in message.parts:
                if isinstance(part, ToolCallPart) and part.tool_name == tool_name:
                    _add_record(records, part.tool_call_id, _decode_arguments(part.args))
        elif isinstance(message, ModelRequest):
            for part in message.parts:
                if isinstance(part, ToolReturnPart):
                    answered.add(part.tool_call_id)

    for tool_call_id in answered:
        if tool_call_id in records:
            records[tool_call_id].completed = True
    return list(records.values())


def find_completed_tool_calls(
    messages: Iterable[dict[str, Any] | ModelMessage],
    tool_name: str = "newTask",
) -> set[str]:
    """Ids of delegation tool calls that already have a result."""
    return {r.tool_call_id for r in find_delegations(messages, tool_name) if r.completed}


def restore_from_transcript(
    registry: SubAgentRegistry,
    parent_chat_id: str,
    messages: Iterable[dict[str, Any] | ModelMessage],
) -> list[str]:
    """Restore every completed delegation of a transcript into a registry.

    Must run before delegation notifications from the same transcript are
    handled, so completed delegations are never launched again.

    Args:
        registry: The parent chat's registry.
        parent_chat_id: Id of the reloaded parent conversation.
        messages: The persisted transcript.

    Returns:
        Tool call ids that were restored.
    """
    tool_name = registry.settings.delegation_tool_name
    restored: list[str] = []
    for record in find_delegations(messages, tool_name):
        if not record.completed:
            continue
        registry.restore_session(
            parent_chat_id,
            record.tool_call_id,
            record.sub_agent_id,
            record.task,
        )
        restored.append(record.tool_call_id)

    if restored:
        logger.debug("Restored %d completed delegation(s) for chat '%s'", len(restored), parent_chat_id)
    return restored


def _scan_dict(
    message: dict[str, Any],
    tool_name: str,
    records: dict[str, DelegationRecord],
    answered: set[str],
) -> None:
    role = message.get("role")
    if role == "assistant":
        for call in message.get("tool_calls") or []:
            function = call.get("function") or {}
            if function.get("name") != tool_name or not call.get("id"):
                continue
            _add_record(records, call["id"], _decode_arguments(function.get("arguments")))
    elif role == "tool" and message.get("tool_call_id"):
        answered.add(message["tool_call_id"])


def _decode_arguments(arguments: Any) -> dict[str, Any]:
    if isinstance(arguments, dict):
        return arguments
    if isinstance(arguments, str) and arguments:
        try:
            decoded = json.loads(arguments)
        except json.JSONDecodeError:
            logger.warning("Undecodable delegation arguments in transcript: %r", arguments)
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


def _add_record(
    records: dict[str, DelegationRecord],
    tool_call_id: str,
    args: dict[str, Any],
) -> None:
    if tool_call_id in records:
        return
    records[tool_call_id] = DelegationRecord(
        tool_call_id=tool_call_id,
        sub_agent_id=str(args.get("subAgentId", args.get("sub_agent_id", ""))),
        task=str(args.get("task", "")),
    )
