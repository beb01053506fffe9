"""Translate service exceptions into HTTP errors."""
from fastapi import HTTPException, status

from chronoguard.services.errors import (
    BudgetConfirmationRequired,
    NotFoundError,
    PermissionDeniedError,
)


def http_error(exc: Exception) -> HTTPException:
    """
    Map a service-layer exception to an HTTPException.

    NotFoundError -> 404, PermissionDeniedError -> 403,
    BudgetConfirmationRequired -> 409, any other ValueError -> 400.
    """
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, PermissionDeniedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, BudgetConfirmationRequired):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))
