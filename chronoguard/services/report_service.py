"""Report service - loads current state and runs the aggregation engine."""
from datetime import date
from typing import Optional

from chronoguard.models.filters import EntryFilter
from chronoguard.models.notification import Notification
from chronoguard.models.report import AnnotatedEntry, CategoryTotal, DashboardStats, TaskGroup
from chronoguard.models.user import User
from chronoguard.services.aggregation import (
    annotate_entries,
    category_distribution,
    dashboard_stats,
    group_by_task,
)
from chronoguard.services.filters import accessible_entries, filter_entries
from chronoguard.services.notifications import derive_notifications
from chronoguard.services.task_service import TaskService
from chronoguard.services.timesheet_service import TimesheetService


class ReportService:
    """Read-only derived views. Nothing here is cached; every call
    recomputes from the stored entries and tasks."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.timesheets = TimesheetService(db)
        self.task_service = TaskService(db)

    async def dashboard(self, actor: User, reference_date: Optional[date] = None) -> DashboardStats:
        """Daily/weekly/monthly totals over the entries ``actor`` may see."""
        entries = accessible_entries(await self.timesheets.list_all_entries(), actor)
        return dashboard_stats(entries, reference_date or date.today())

    async def annotated_entries(self, actor: User, filters: EntryFilter) -> list[AnnotatedEntry]:
        """Filtered entries with overtime flags computed on the full entry set."""
        all_entries = await self.timesheets.list_all_entries()
        visible = filter_entries(all_entries, actor, filters)
        return annotate_entries(visible, all_entries, await self.task_service.list_tasks())

    async def timeline(
        self,
        actor: User,
        filters: EntryFilter,
        today: Optional[date] = None,
    ) -> list[TaskGroup]:
        """Filtered entries grouped per task for the Gantt-style view."""
        all_entries = await self.timesheets.list_all_entries()
        visible = filter_entries(all_entries, actor, filters)
        return group_by_task(
            visible,
            all_entries,
            await self.task_service.list_tasks(),
            today or date.today(),
        )

    async def categories(self, actor: User, filters: EntryFilter) -> list[CategoryTotal]:
        return category_distribution(await self.timesheets.list_entries(actor, filters))

    async def notifications(self, actor: User, today: Optional[date] = None) -> list[Notification]:
        """Overdue and over-budget alerts. Employees get none."""
        if not actor.is_manager:
            return []
        return derive_notifications(
            await self.task_service.list_tasks(),
            await self.timesheets.list_all_entries(),
            today or date.today(),
        )
