"""Timesheet entry model definitions."""
import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

DEFAULT_CATEGORIES = (
    "Development",
    "Design",
    "Meeting",
    "Research",
    "Testing",
    "Documentation",
)


class TimesheetEntryBase(BaseModel):
    """Base timesheet entry fields."""

    date: datetime.date
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: str = Field(pattern=HHMM_PATTERN)
    task_name: str = Field(min_length=1)
    task_category: str = "Development"
    description: str = ""


class TimesheetEntryCreate(TimesheetEntryBase):
    """Entry creation model.

    ``user_id`` lets a manager log time on behalf of someone else; employees
    always log for themselves.
    """

    user_id: Optional[str] = None
    confirm_over_budget: bool = False


class TimesheetEntryUpdate(BaseModel):
    """Entry update model - all fields optional."""

    date: Optional[datetime.date] = None
    start_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=HHMM_PATTERN)
    task_name: Optional[str] = Field(default=None, min_length=1)
    task_category: Optional[str] = None
    description: Optional[str] = None
    confirm_over_budget: bool = False


class ManagerCommentUpdate(BaseModel):
    """Manager feedback on an entry."""

    manager_comment: str = ""


class TimesheetEntry(TimesheetEntryBase):
    """Full timesheet entry model with database fields.

    ``user_name`` is copied from the user when the entry is created and is
    not refreshed if the user is renamed later.
    """

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    user_name: str
    duration_hours: float = Field(ge=0)
    manager_comment: str = ""

    model_config = {"populate_by_name": True}


class CheckStatus(str, Enum):
    """Outcome of the validation gate."""

    OK = "ok"
    REJECTED = "rejected"
    BUDGET_WARNING = "budget_warning"


class ValidationOutcome(BaseModel):
    """Result of validating a candidate entry against the stored entries."""

    status: CheckStatus = CheckStatus.OK
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CheckStatus.OK
