"""Report router - dashboard totals, timeline, categories and notifications."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from chronoguard.database import get_database
from chronoguard.models.filters import EntryFilter
from chronoguard.models.notification import Notification
from chronoguard.models.report import AnnotatedEntry, CategoryTotal, DashboardStats, TaskGroup
from chronoguard.models.user import User
from chronoguard.routers.auth import get_current_user
from chronoguard.routers.timesheets import entry_filter
from chronoguard.services.report_service import ReportService


router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    reference_date: Optional[date] = Query(None, alias="date"),
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Daily, weekly and monthly totals around ``date`` (defaults to today)."""
    return await ReportService(db).dashboard(current_user, reference_date)


@router.get("/entries", response_model=list[AnnotatedEntry])
async def annotated_entries(
    filters: EntryFilter = Depends(entry_filter),
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Filtered entries with overtime and logged-after-due-date flags."""
    return await ReportService(db).annotated_entries(current_user, filters)


@router.get("/timeline", response_model=list[TaskGroup])
async def timeline(
    filters: EntryFilter = Depends(entry_filter),
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Filtered entries grouped per task."""
    return await ReportService(db).timeline(current_user, filters)


@router.get("/categories", response_model=list[CategoryTotal])
async def categories(
    filters: EntryFilter = Depends(entry_filter),
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Hours per category over the filtered entries."""
    return await ReportService(db).categories(current_user, filters)


@router.get("/notifications", response_model=list[Notification])
async def notifications(
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Overdue and over-budget task alerts; empty for employees."""
    return await ReportService(db).notifications(current_user)
