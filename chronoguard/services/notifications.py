"""Notification deriver: overdue and over-budget alerts for managers."""
from datetime import date
from typing import Iterable

from chronoguard.models.notification import Notification, NotificationType, Severity
from chronoguard.models.task import TaskDefinition
from chronoguard.models.timesheet import TimesheetEntry
from chronoguard.services.aggregation import is_task_overdue
from chronoguard.utils.timecalc import exceeds_hours


def derive_notifications(
    tasks: Iterable[TaskDefinition],
    entries: Iterable[TimesheetEntry],
    today: date,
) -> list[Notification]:
    """
    Build at most one OVERDUE and one OVERTIME notification per task.

    Overdue uses the task's due date and status. Overtime compares the
    all-time hours logged against the task with its estimate.
    """
    logged: dict[str, float] = {}
    for entry in entries:
        logged[entry.task_name] = logged.get(entry.task_name, 0.0) + entry.duration_hours

    notifications = []
    for task in tasks:
        if is_task_overdue(task, today):
            notifications.append(
                Notification(
                    id=f"overdue-{task.id}",
                    type=NotificationType.OVERDUE,
                    title="Task Overdue",
                    message=f"{task.name} was due on {task.due_date.isoformat()}",
                    severity=Severity.HIGH,
                )
            )

        spent = logged.get(task.name, 0.0)
        if task.budget is not None and exceeds_hours(spent, task.budget):
            notifications.append(
                Notification(
                    id=f"overtime-{task.id}",
                    type=NotificationType.OVERTIME,
                    title="Budget Exceeded",
                    message=f"{task.name} has {spent:.1f}h logged against {task.budget:g}h estimated",
                    severity=Severity.MEDIUM,
                )
            )

    return notifications
