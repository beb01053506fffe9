"""Task router - API endpoints for task definitions."""
from fastapi import APIRouter, Depends, status

from chronoguard.database import get_database
from chronoguard.models.task import TaskCreate, TaskDefinition, TaskUpdate
from chronoguard.models.user import User
from chronoguard.routers.auth import get_current_user
from chronoguard.routers.errors import http_error
from chronoguard.services.errors import PermissionDeniedError
from chronoguard.services.task_service import TaskService


router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskDefinition])
async def list_tasks(
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """List all tasks."""
    return await TaskService(db).list_tasks()


@router.get("/{task_id}", response_model=TaskDefinition)
async def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Get a task by ID."""
    try:
        return await TaskService(db).get_task(task_id)
    except ValueError as e:
        raise http_error(e)


@router.post("", response_model=TaskDefinition, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Create a task.

    - Managers only
    - The code is upper-cased and becomes the immutable task id
    """
    try:
        return await TaskService(db).create_task(current_user, task)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.patch("/{task_id}", response_model=TaskDefinition)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Update a task's title, estimate, due date or status (managers only)."""
    try:
        return await TaskService(db).update_task(current_user, task_id, task_update)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Delete a task (managers only)."""
    try:
        return await TaskService(db).delete_task(current_user, task_id)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)
