"""Backup router - SQL export and restore (managers only)."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from chronoguard.database import get_database
from chronoguard.models.user import User
from chronoguard.routers.auth import get_current_user
from chronoguard.routers.errors import http_error
from chronoguard.services.backup_service import BackupService
from chronoguard.services.errors import PermissionDeniedError


router = APIRouter(prefix="/backup", tags=["backup"])


@router.get("/export", response_class=PlainTextResponse)
async def export_backup(
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Download the whole store as an SQL script."""
    try:
        script = await BackupService(db).export_sql(current_user)
    except PermissionDeniedError as e:
        raise http_error(e)

    return PlainTextResponse(
        script,
        headers={"Content-Disposition": 'attachment; filename="chronoguard_backup.sql"'},
    )


@router.post("/import")
async def import_backup(
    request: Request,
    current_user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Replace the store with an SQL script sent as the raw request body.

    - Managers only
    - A malformed script is rejected (400) and nothing is changed
    """
    body = await request.body()
    try:
        return await BackupService(db).import_sql(current_user, body.decode("utf-8"))
    except UnicodeDecodeError:
        raise http_error(ValueError("Backup must be UTF-8 text"))
    except (ValueError, PermissionDeniedError) as e:
        raise http_error(e)
