"""Tool adapters for sub-agent delegation.

Classes:
    NewTaskTool: Starts a session when a delegation tool call is final.
    TaskResultTool: Records a sub-agent's result on its session.
    ToolUIPart: One state notification of a streamed tool call.
    ToolCallState: Lifecycle state of a tool call.
"""

from __future__ import annotations

from platypus.tools.lifecycle import ToolCallState, ToolUIPart
from platypus.tools.new_task import DelegationStatus, NewTaskTool, NewTaskView
from platypus.tools.schemas import NewTaskInput, TaskResultInput
from platypus.tools.task_result import TaskResultTool

__all__ = [
    "DelegationStatus",
    "NewTaskInput",
    "NewTaskTool",
    "NewTaskView",
    "TaskResultInput",
    "TaskResultTool",
    "ToolCallState",
    "ToolUIPart",
]
