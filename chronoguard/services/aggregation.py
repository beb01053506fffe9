"""Aggregation engine: pure groupings and totals behind every view.

Every function here is deterministic in its arguments and keeps no state
between calls.
"""
from datetime import date, timedelta
from typing import Iterable, Optional

from chronoguard.models.report import (
    AnnotatedEntry,
    CategoryTotal,
    DashboardStats,
    DayTotal,
    OvertimeFlag,
    TaskGroup,
)
from chronoguard.models.task import TaskDefinition, TaskStatus
from chronoguard.models.timesheet import TimesheetEntry
from chronoguard.utils.timecalc import exceeds_hours, month_range, week_range


def chronological(entries: Iterable[TimesheetEntry]) -> list[TimesheetEntry]:
    """Entries sorted by (date, start_time); ties keep their input order."""
    return sorted(entries, key=lambda e: (e.date, e.start_time))


def tasks_by_name(tasks: Iterable[TaskDefinition]) -> dict[str, TaskDefinition]:
    index: dict[str, TaskDefinition] = {}
    for task in tasks:
        index.setdefault(task.name, task)
    return index


def is_task_overdue(task: TaskDefinition, today: date) -> bool:
    """A task is overdue once its due date has passed while it is not Done."""
    if task.due_date is None or task.status == TaskStatus.DONE:
        return False
    return task.due_date < today


def is_logged_after_due(entry: TimesheetEntry, task: Optional[TaskDefinition]) -> bool:
    """True when the entry's date is strictly after the task's due date."""
    if task is None or task.due_date is None:
        return False
    return entry.date > task.due_date


def compute_overtime(
    entries: Iterable[TimesheetEntry],
    tasks: Iterable[TaskDefinition],
) -> dict[str, OvertimeFlag]:
    """
    Flag entries that push their task past its hour budget.

    Each budgeted task's entries are replayed in chronological order while
    accumulating hours; every entry after which the running total exceeds
    the budget is flagged with the total at that point. Once a task is over
    budget, all of its later entries stay flagged.

    Must be given the complete entry set, not a filtered view, otherwise
    the running totals are wrong.

    Args:
        entries: Every stored entry
        tasks: Every task definition

    Returns:
        Mapping of entry id to its overtime flag (unflagged entries absent)
    """
    index = tasks_by_name(tasks)
    running: dict[str, float] = {}
    flags: dict[str, OvertimeFlag] = {}

    for entry in chronological(entries):
        task = index.get(entry.task_name)
        if task is None or task.budget is None:
            continue
        total = running.get(entry.task_name, 0.0) + entry.duration_hours
        running[entry.task_name] = total
        if exceeds_hours(total, task.budget):
            flags[entry.id] = OvertimeFlag(cumulative_hours=total, limit_hours=task.budget)

    return flags


def annotate_entries(
    visible: Iterable[TimesheetEntry],
    all_entries: Iterable[TimesheetEntry],
    tasks: Iterable[TaskDefinition],
) -> list[AnnotatedEntry]:
    """Attach overtime (from the full entry set) and due-date flags to ``visible``."""
    tasks = list(tasks)
    overtime = compute_overtime(all_entries, tasks)
    index = tasks_by_name(tasks)
    return [
        AnnotatedEntry(
            entry=entry,
            overtime=overtime.get(entry.id),
            logged_after_due=is_logged_after_due(entry, index.get(entry.task_name)),
        )
        for entry in visible
    ]


def total_hours(entries: Iterable[TimesheetEntry]) -> float:
    return sum(e.duration_hours for e in entries)


def hours_between(entries: Iterable[TimesheetEntry], start: date, end: date) -> float:
    """Hours of entries dated within ``[start, end]``."""
    return sum(e.duration_hours for e in entries if start <= e.date <= end)


def group_by_task(
    visible: Iterable[TimesheetEntry],
    all_entries: Iterable[TimesheetEntry],
    tasks: Iterable[TaskDefinition],
    today: date,
) -> list[TaskGroup]:
    """
    Partition ``visible`` entries by task name for the timeline view.

    Groups appear in order of their earliest entry. The group's category is
    the category of that earliest entry.
    """
    tasks = list(tasks)
    index = tasks_by_name(tasks)
    annotated = annotate_entries(chronological(visible), all_entries, tasks)

    grouped: dict[str, list[AnnotatedEntry]] = {}
    for item in annotated:
        grouped.setdefault(item.entry.task_name, []).append(item)

    groups = []
    for name, items in grouped.items():
        task = index.get(name)
        groups.append(
            TaskGroup(
                task_name=name,
                category=items[0].entry.task_category,
                task=task,
                entries=items,
                total_hours=total_hours(i.entry for i in items),
                is_overdue=is_task_overdue(task, today) if task else False,
            )
        )
    return groups


def category_distribution(entries: Iterable[TimesheetEntry]) -> list[CategoryTotal]:
    """Hours per category, largest first (ties by name)."""
    totals: dict[str, float] = {}
    for entry in entries:
        totals[entry.task_category] = totals.get(entry.task_category, 0.0) + entry.duration_hours
    return [
        CategoryTotal(category=name, hours=hours)
        for name, hours in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


def weekly_breakdown(entries: Iterable[TimesheetEntry], day: date) -> list[DayTotal]:
    """Seven zero-filled day totals, Monday to Sunday, for the week of ``day``."""
    start, _ = week_range(day)
    per_day = {start + timedelta(days=i): 0.0 for i in range(7)}
    for entry in entries:
        if entry.date in per_day:
            per_day[entry.date] += entry.duration_hours
    return [
        DayTotal(date=d, weekday=d.strftime("%a"), hours=hours)
        for d, hours in per_day.items()
    ]


def dashboard_stats(entries: Iterable[TimesheetEntry], reference_date: date) -> DashboardStats:
    """Daily, weekly and monthly totals around ``reference_date``.

    The category breakdown covers the reference month.
    """
    entries = list(entries)
    week_start, week_end = week_range(reference_date)
    month_start, month_end = month_range(reference_date)
    monthly = [e for e in entries if month_start <= e.date <= month_end]

    return DashboardStats(
        reference_date=reference_date,
        week_start=week_start,
        week_end=week_end,
        daily_hours=hours_between(entries, reference_date, reference_date),
        weekly_hours=hours_between(entries, week_start, week_end),
        monthly_hours=total_hours(monthly),
        weekly_breakdown=weekly_breakdown(entries, reference_date),
        category_breakdown=category_distribution(monthly),
        entry_count=len(entries),
    )
