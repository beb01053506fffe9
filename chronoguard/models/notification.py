"""Notification models."""
from enum import Enum

from pydantic import BaseModel


class NotificationType(str, Enum):
    OVERDUE = "OVERDUE"
    OVERTIME = "OVERTIME"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class Notification(BaseModel):
    """Derived alert shown to managers. Never persisted."""

    id: str
    type: NotificationType
    title: str
    message: str
    severity: Severity
