"""Task definition models."""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """Task workflow states."""

    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


class TaskCreate(BaseModel):
    """Task creation model.

    The task id is the upper-cased code and the display name is built as
    ``"<ID>: <title>"``.
    """

    code: str = Field(min_length=1)
    title: str = Field(min_length=1)
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    status: TaskStatus = TaskStatus.TODO


class TaskUpdate(BaseModel):
    """Task update model - all fields optional, the id is immutable."""

    title: Optional[str] = Field(default=None, min_length=1)
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None


class TaskDefinition(BaseModel):
    """Full task model."""

    id: str = Field(alias="_id", serialization_alias="id")
    name: str
    estimated_hours: Optional[float] = None
    due_date: Optional[date] = None
    status: TaskStatus = TaskStatus.TODO

    model_config = {"populate_by_name": True}

    @property
    def budget(self) -> Optional[float]:
        """Hour ceiling, or None when the task has no budget (absent or 0)."""
        return self.estimated_hours or None
