"""Aggregated report models."""
import datetime
from typing import Optional

from pydantic import BaseModel

from chronoguard.models.task import TaskDefinition
from chronoguard.models.timesheet import TimesheetEntry


class OvertimeFlag(BaseModel):
    """Running task total at the entry that pushed it over budget."""

    cumulative_hours: float
    limit_hours: float


class AnnotatedEntry(BaseModel):
    """An entry together with its derived overtime and due-date flags."""

    entry: TimesheetEntry
    overtime: Optional[OvertimeFlag] = None
    logged_after_due: bool = False


class TaskGroup(BaseModel):
    """Entries sharing one task name."""

    task_name: str
    category: str
    task: Optional[TaskDefinition] = None
    entries: list[AnnotatedEntry]
    total_hours: float
    is_overdue: bool = False


class DayTotal(BaseModel):
    """Hours logged on one day."""

    date: datetime.date
    weekday: str
    hours: float


class CategoryTotal(BaseModel):
    """Hours logged against one category."""

    category: str
    hours: float


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard around a reference date."""

    reference_date: datetime.date
    week_start: datetime.date
    week_end: datetime.date
    daily_hours: float
    weekly_hours: float
    monthly_hours: float
    weekly_breakdown: list[DayTotal]
    category_breakdown: list[CategoryTotal]
    entry_count: int
