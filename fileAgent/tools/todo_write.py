"""Todo list tool; the list is recorded in the audit session."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

from shared.audit.session import AuditSession
from shared.capabilities.base import Tool
from shared.errors import ValidationError

LOGGER = logging.getLogger(__name__)

STATUS_LABELS = {"completed": "[DONE]", "in_progress": "[ACTIVE]", "pending": "[TODO]"}
PRIORITY_LABELS = {"high": " [HIGH]", "medium": " [MED]", "low": " [LOW]"}


class TodoItem(BaseModel):
    content: str = Field(description="Task description")
    status: Literal["pending", "in_progress", "completed"] = Field(
        description="Current status of the task"
    )
    priority: Literal["high", "medium", "low"] = Field(
        default="medium", description="Task priority level"
    )
    id: str = Field(description="Unique identifier for the task")

    @field_validator("content", "id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class TodoWriteArgs(BaseModel):
    todos: List[TodoItem] = Field(description="Todo items to create or update")


def summarize(todos: List[TodoItem]) -> str:
    counts = {status: 0 for status in STATUS_LABELS}
    for todo in todos:
        counts[todo.status] += 1
    total = len(todos)

    lines = []
    if total > 1:
        percent = counts["completed"] * 100 // total
        lines.append(f"Todo Progress: {counts['completed']}/{total} ({percent}% complete)")
        if counts["in_progress"]:
            lines.append("Currently working on 1 task")
        if counts["pending"]:
            lines.append(f"{counts['pending']} tasks remaining")
        lines.append("")
    elif total == 1:
        lines.extend(["Single todo update", ""])

    for index, todo in enumerate(todos, start=1):
        lines.append(
            f"{index}. {STATUS_LABELS[todo.status]} {todo.content}{PRIORITY_LABELS[todo.priority]}"
        )
    lines.append("")
    lines.append("Todos have been updated and tracked for progress visibility.")
    return "\n".join(lines)


class TodoWriteTool(Tool):
    name = "todo_write"
    description = (
        "Create and update a structured task list for multi-step work. "
        "Keep exactly one task in_progress at a time."
    )
    args_model = TodoWriteArgs

    def __init__(self, session: AuditSession):
        self.session = session

    async def execute(self, params: TodoWriteArgs) -> str:
        active = sum(1 for todo in params.todos if todo.status == "in_progress")
        if active > 1:
            raise ValidationError(
                f"Invalid state: {active} todos marked as 'in_progress'. "
                "Only ONE todo can be 'in_progress' at a time"
            )

        self.session.write(
            "todos",
            {
                "action": "todo_update",
                "todos": [todo.model_dump() for todo in params.todos],
                "timestamp": datetime.now().isoformat(),
            },
        )
        LOGGER.info(f"Stored {len(params.todos)} todos in audit session")
        return summarize(params.todos)
