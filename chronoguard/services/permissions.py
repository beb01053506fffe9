"""Role and ownership checks shared by the services."""
from chronoguard.models.timesheet import TimesheetEntry
from chronoguard.models.user import User
from chronoguard.services.errors import PermissionDeniedError


def require_manager(actor: User, action: str) -> None:
    """Raise PermissionDeniedError unless ``actor`` is a manager."""
    if not actor.is_manager:
        raise PermissionDeniedError(f"Only managers can {action}")


def can_modify_entry(actor: User, entry: TimesheetEntry) -> bool:
    """Entries may be changed by their owner or by any manager."""
    return actor.is_manager or entry.user_id == actor.id
