"""Timesheet router - logging, editing and listing time entries."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from chronoguard.database import get_database
from chronoguard.models.filters import DateRangeMode, EntryFilter, SortOrder
from chronoguard.models.timesheet import (
    ManagerCommentUpdate,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
)
from chronoguard.models.user import User
from chronoguard.routers.auth import get_current_user
from chronoguard.routers.errors import http_error
from chronoguard.services.errors import PermissionDeniedError
from chronoguard.services.timesheet_service import TimesheetService


router = APIRouter(prefix="/timesheets", tags=["timesheets"])


def entry_filter(
    mode: DateRangeMode = Query(DateRangeMode.ALL, description="Date window"),
    cursor: Optional[date] = Query(None, description="Anchor date for day/week/month"),
    start: Optional[date] = Query(None, description="Range start (inclusive)"),
    end: Optional[date] = Query(None, description="Range end (inclusive)"),
    user_id: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    task_name: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches task, description or user name"),
    order: SortOrder = Query(SortOrder.ASC),
) -> EntryFilter:
    """Dependency building the view filter from query parameters."""
    return EntryFilter(
        mode=mode,
        cursor=cursor,
        start=start,
        end=end,
        user_id=user_id,
        category=category,
        task_name=task_name,
        search=search,
        order=order,
    )


@router.get("", response_model=list[TimesheetEntry])
async def list_entries(
    filters: EntryFilter = Depends(entry_filter),
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    List time entries visible to the current user.

    - Employees only ever see their own entries
    - Sorted by date then start time (``order=desc`` for recent activity)
    """
    return await TimesheetService(db).list_entries(current_user, filters)


@router.get("/categories", response_model=list[str])
async def list_categories(
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Categories offered when logging time."""
    return await TimesheetService(db).list_categories()


@router.post("", response_model=TimesheetEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_create: TimesheetEntryCreate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Log a time entry.

    - Duration is derived from start and end time
    - 400 on overlap or when the weekly limit would be exceeded
    - 409 when the task budget would be exceeded; resend with
      ``confirm_over_budget`` to save anyway
    """
    try:
        return await TimesheetService(db).create_entry(current_user, entry_create)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.get("/{entry_id}", response_model=TimesheetEntry)
async def get_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Get a specific time entry (owner or manager)."""
    try:
        return await TimesheetService(db).get_entry(current_user, entry_id)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.patch("/{entry_id}", response_model=TimesheetEntry)
async def update_entry(
    entry_id: str,
    entry_update: TimesheetEntryUpdate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Edit a time entry (owner or manager); re-validated like a new entry."""
    try:
        return await TimesheetService(db).update_entry(current_user, entry_id, entry_update)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.put("/{entry_id}/comment", response_model=TimesheetEntry)
async def set_comment(
    entry_id: str,
    comment: ManagerCommentUpdate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Set the manager comment on an entry (managers only)."""
    try:
        return await TimesheetService(db).set_manager_comment(
            current_user, entry_id, comment.manager_comment
        )
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Delete a time entry (owner or manager). Hard delete."""
    try:
        return await TimesheetService(db).delete_entry(current_user, entry_id)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)
