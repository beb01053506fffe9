"""View filter models."""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class DateRangeMode(str, Enum):
    """Date window applied by the view filter pipeline."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    RANGE = "range"
    ALL = "all"


class SortOrder(str, Enum):
    """Ordering by entry date (then start time)."""

    ASC = "asc"
    DESC = "desc"


class EntryFilter(BaseModel):
    """Filters composed by the view pipeline (all combined with AND)."""

    mode: DateRangeMode = DateRangeMode.ALL
    cursor: Optional[date] = None
    start: Optional[date] = None
    end: Optional[date] = None
    user_id: Optional[str] = None
    category: Optional[str] = None
    task_name: Optional[str] = None
    search: Optional[str] = None
    order: SortOrder = SortOrder.ASC
