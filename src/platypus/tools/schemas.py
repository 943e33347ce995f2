"""Input schemas of the delegation and completion tools."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from platypus.subagents.config import TaskResult

# The completion tool's input is exactly the result a session records.
TaskResultInput = TaskResult


class NewTaskInput(BaseModel):
    """Arguments of the delegation tool.

    Attributes:
        sub_agent_id: Id of the agent to delegate to.
        task: A fully self-contained task description.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sub_agent_id: str = Field(
        alias="subAgentId",
        min_length=1,
        description="ID of the sub-agent to delegate the task to",
    )
    task: str = Field(
        min_length=1,
        description=(
            "A fully self-contained task description. Include ALL necessary context, "
            "constraints, and requirements directly."
        ),
    )


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_input(
    model: type[ModelT],
    data: dict[str, Any] | None,
) -> ModelT | None:
    """Validate tool call arguments, returning ``None`` when incomplete.

    Args:
        model: Schema to validate against.
        data: Decoded tool call arguments.

    Returns:
        The validated input, or ``None`` if ``data`` is missing or invalid.
    """
    if not data:
        return None
    try:
        return model.model_validate(data)
    except ValidationError:
        return None
