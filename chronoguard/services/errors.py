"""Exceptions raised by the service layer.

Routers translate these into HTTP responses; everything except
``PermissionDeniedError`` is a ``ValueError`` so callers that only care
about "bad input" can catch that.
"""


class NotFoundError(ValueError):
    """Requested user, task or entry does not exist."""


class EntryRejectedError(ValueError):
    """Entry failed a blocking check (overlap or weekly limit)."""


class BudgetConfirmationRequired(ValueError):
    """Entry would push a task over its hour budget and was not confirmed."""


class BackupImportError(ValueError):
    """SQL backup script could not be replayed."""


class PermissionDeniedError(Exception):
    """Actor's role or ownership does not allow the operation."""
