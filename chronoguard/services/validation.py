"""Validation engine: pure checks run before an entry is written."""
from datetime import date
from typing import Iterable, Optional

from chronoguard.models.task import TaskDefinition
from chronoguard.models.timesheet import CheckStatus, TimesheetEntry, ValidationOutcome
from chronoguard.utils.timecalc import exceeds_hours, to_minutes, week_range, week_start

DEFAULT_WEEKLY_LIMIT = 40.0


def _others(entries: Iterable[TimesheetEntry], exclude_id: Optional[str]):
    return [e for e in entries if exclude_id is None or e.id != exclude_id]


def find_overlap(
    user_id: str,
    day: date,
    start_time: str,
    end_time: str,
    entries: Iterable[TimesheetEntry],
    exclude_id: Optional[str] = None,
) -> Optional[TimesheetEntry]:
    """
    Return the first same-user, same-day entry whose interval intersects
    ``[start_time, end_time)``, or None.

    Touching endpoints (one ends at 11:20, the next starts at 11:20) do not
    overlap.
    """
    new_start = to_minutes(start_time)
    new_end = to_minutes(end_time)

    for entry in _others(entries, exclude_id):
        if entry.user_id != user_id or entry.date != day:
            continue
        if new_start < to_minutes(entry.end_time) and new_end > to_minutes(entry.start_time):
            return entry
    return None


def weekly_hours(
    user_id: str,
    day: date,
    entries: Iterable[TimesheetEntry],
    exclude_id: Optional[str] = None,
) -> float:
    """Hours already logged by ``user_id`` in the Monday-Sunday week of ``day``."""
    start, end = week_range(day)
    return sum(
        e.duration_hours
        for e in _others(entries, exclude_id)
        if e.user_id == user_id and start <= e.date <= end
    )


def task_hours(
    task_name: str,
    entries: Iterable[TimesheetEntry],
    exclude_id: Optional[str] = None,
) -> float:
    """Hours logged against ``task_name`` by every user."""
    return sum(
        e.duration_hours for e in _others(entries, exclude_id) if e.task_name == task_name
    )


def find_task(task_name: str, tasks: Iterable[TaskDefinition]) -> Optional[TaskDefinition]:
    for task in tasks:
        if task.name == task_name:
            return task
    return None


def validate_entry(
    candidate: TimesheetEntry,
    entries: Iterable[TimesheetEntry],
    tasks: Iterable[TaskDefinition],
    exclude_id: Optional[str] = None,
    weekly_limit: float = DEFAULT_WEEKLY_LIMIT,
) -> ValidationOutcome:
    """
    Run the save-time checks for a candidate entry, in order.

    1. Overlap with another entry of the same user on the same day (blocking).
    2. Weekly hour limit for the user's Monday-anchored week (blocking).
    3. Task hour budget, summed across all users (warning, needs confirmation).

    Args:
        candidate: Entry about to be written, with its duration already derived
        entries: Every stored entry
        tasks: Every task definition
        exclude_id: Id of the entry being edited, ignored by every check
        weekly_limit: Maximum hours per user per week

    Returns:
        ValidationOutcome carrying the status and a human-readable reason
    """
    entries = list(entries)

    clash = find_overlap(
        candidate.user_id,
        candidate.date,
        candidate.start_time,
        candidate.end_time,
        entries,
        exclude_id,
    )
    if clash is not None:
        return ValidationOutcome(
            status=CheckStatus.REJECTED,
            reason=(
                f"Time overlaps with an existing entry from {clash.start_time} "
                f"to {clash.end_time} on {clash.date.isoformat()} ({clash.task_name})"
            ),
        )

    logged = weekly_hours(candidate.user_id, candidate.date, entries, exclude_id)
    if exceeds_hours(logged + candidate.duration_hours, weekly_limit):
        week_start_day = week_start(candidate.date)
        return ValidationOutcome(
            status=CheckStatus.REJECTED,
            reason=(
                f"Weekly limit of {weekly_limit:g}h exceeded for the week of "
                f"{week_start_day.isoformat()}: {logged:.2f}h already logged, "
                f"{candidate.duration_hours:.2f}h requested"
            ),
        )

    task = find_task(candidate.task_name, tasks)
    if task is not None and task.budget is not None:
        spent = task_hours(candidate.task_name, entries, exclude_id)
        if exceeds_hours(spent + candidate.duration_hours, task.budget):
            return ValidationOutcome(
                status=CheckStatus.BUDGET_WARNING,
                reason=(
                    f"Task '{task.name}' would reach "
                    f"{spent + candidate.duration_hours:.2f}h of its "
                    f"{task.budget:g}h estimate"
                ),
            )

    return ValidationOutcome()
