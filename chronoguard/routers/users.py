"""User router - API endpoints for user management (managers only for writes)."""
from fastapi import APIRouter, Depends, status

from chronoguard.database import get_database
from chronoguard.models.user import User, UserCreate, UserUpdate
from chronoguard.routers.auth import get_current_user
from chronoguard.routers.errors import http_error
from chronoguard.services.errors import PermissionDeniedError
from chronoguard.services.user_service import UserService


router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[User])
async def list_users(
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """List all users."""
    return await UserService(db).list_users()


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Get a user by ID."""
    try:
        return await UserService(db).get_user(user_id)
    except ValueError as e:
        raise http_error(e)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Create a user.

    - Managers only
    - Username must be unique
    """
    try:
        return await UserService(db).create_user(current_user, user)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Update a user (managers only)."""
    try:
        return await UserService(db).update_user(current_user, user_id, user_update)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Delete a user.

    - Managers only
    - Nobody can delete their own account
    """
    try:
        return await UserService(db).delete_user(current_user, user_id)
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)
