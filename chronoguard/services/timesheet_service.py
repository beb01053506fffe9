"""Timesheet service - business logic for logging time."""
import asyncio
import logging
import weakref
from typing import Optional

from bson import ObjectId
from pymongo import ReturnDocument

from chronoguard.config import settings
from chronoguard.models.filters import EntryFilter
from chronoguard.models.timesheet import (
    DEFAULT_CATEGORIES,
    CheckStatus,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
)
from chronoguard.models.user import User
from chronoguard.services.errors import (
    BudgetConfirmationRequired,
    EntryRejectedError,
    NotFoundError,
    PermissionDeniedError,
)
from chronoguard.services.filters import filter_entries
from chronoguard.services.permissions import can_modify_entry, require_manager
from chronoguard.services.task_service import TaskService
from chronoguard.services.validation import validate_entry
from chronoguard.utils.timecalc import duration_hours

logger = logging.getLogger(__name__)

# Per event loop, per user. Held from the validation read until the write lands.
_user_locks: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def user_write_lock(user_id: str) -> asyncio.Lock:
    """Lock serializing validated writes for one user's entries."""
    locks = _user_locks.setdefault(asyncio.get_running_loop(), {})
    return locks.setdefault(user_id, asyncio.Lock())


def entry_to_doc(entry: TimesheetEntry) -> dict:
    """Convert a TimesheetEntry to its database document."""
    return {
        "_id": entry.id,
        "user_id": entry.user_id,
        "user_name": entry.user_name,
        "date": entry.date.isoformat(),
        "start_time": entry.start_time,
        "end_time": entry.end_time,
        "duration_hours": entry.duration_hours,
        "task_name": entry.task_name,
        "task_category": entry.task_category,
        "description": entry.description,
        "manager_comment": entry.manager_comment or "",
    }


class TimesheetService:
    """Service for handling timesheet entries.

    Every create and update goes through the validation gate against the
    full stored entry set; durations are always derived from start/end.
    """

    def __init__(self, db, weekly_limit: Optional[float] = None):
        """Initialize service with database connection."""
        self.db = db
        self.entries = db["timesheets"]
        self.users = db["users"]
        self.weekly_limit = weekly_limit if weekly_limit is not None else settings.weekly_hour_limit

    def _doc_to_entry(self, doc: dict) -> TimesheetEntry:
        """Convert database document to TimesheetEntry model."""
        return TimesheetEntry(
            _id=doc["_id"],
            user_id=doc["user_id"],
            user_name=doc["user_name"],
            date=doc["date"],
            start_time=doc["start_time"],
            end_time=doc["end_time"],
            duration_hours=doc["duration_hours"],
            task_name=doc["task_name"],
            task_category=doc["task_category"],
            description=doc.get("description", ""),
            manager_comment=doc.get("manager_comment") or "",
        )

    async def _get_owned(self, actor: User, entry_id: str) -> TimesheetEntry:
        doc = await self.entries.find_one({"_id": entry_id})
        if not doc:
            raise NotFoundError("Time entry not found")

        entry = self._doc_to_entry(doc)
        if not can_modify_entry(actor, entry):
            raise PermissionDeniedError("You can only change your own entries")
        return entry

    async def _check(
        self,
        candidate: TimesheetEntry,
        confirm_over_budget: bool,
        exclude_id: Optional[str] = None,
    ) -> None:
        """
        Run the validation gate for a candidate entry.

        Raises:
            EntryRejectedError: On overlap or weekly limit
            BudgetConfirmationRequired: On budget overrun without confirmation
        """
        outcome = validate_entry(
            candidate,
            await self.list_all_entries(),
            await TaskService(self.db).list_tasks(),
            exclude_id=exclude_id,
            weekly_limit=self.weekly_limit,
        )

        if outcome.status == CheckStatus.REJECTED:
            logger.warning("Entry rejected for user %s: %s", candidate.user_id, outcome.reason)
            raise EntryRejectedError(outcome.reason)

        if outcome.status == CheckStatus.BUDGET_WARNING:
            if not confirm_over_budget:
                raise BudgetConfirmationRequired(outcome.reason)
            logger.info("Budget overrun confirmed for user %s: %s", candidate.user_id, outcome.reason)

    async def list_all_entries(self) -> list[TimesheetEntry]:
        """Every stored entry, unfiltered. Used for overtime and validation."""
        docs = await self.entries.find({}).to_list(length=None)
        return [self._doc_to_entry(doc) for doc in docs]

    async def list_categories(self) -> list[str]:
        """The standard categories, then any other category already in use."""
        used = await self.entries.distinct("task_category")
        extra = sorted(c for c in used if c and c not in DEFAULT_CATEGORIES)
        return list(DEFAULT_CATEGORIES) + extra

    async def list_entries(self, actor: User, filters: EntryFilter) -> list[TimesheetEntry]:
        """List the entries visible to ``actor`` after applying ``filters``."""
        return filter_entries(await self.list_all_entries(), actor, filters)

    async def get_entry(self, actor: User, entry_id: str) -> TimesheetEntry:
        """
        Get a single entry.

        Raises:
            NotFoundError: If entry not found
            PermissionDeniedError: If an employee asks for someone else's entry
        """
        return await self._get_owned(actor, entry_id)

    async def create_entry(
        self,
        actor: User,
        entry_create: TimesheetEntryCreate,
    ) -> TimesheetEntry:
        """
        Log a new time entry.

        Args:
            actor: User performing the operation
            entry_create: Entry data; ``user_id`` is honoured for managers only

        Returns:
            Created entry

        Raises:
            PermissionDeniedError: If an employee logs time for someone else
            NotFoundError: If the target user does not exist
            EntryRejectedError: On overlap or weekly limit
            BudgetConfirmationRequired: If over budget and not confirmed
        """
        owner_id = entry_create.user_id or actor.id
        if owner_id != actor.id:
            require_manager(actor, "log time for other users")

        owner_doc = await self.users.find_one({"_id": owner_id})
        if not owner_doc:
            raise NotFoundError("User not found")

        candidate = TimesheetEntry(
            _id=str(ObjectId()),
            user_id=owner_id,
            user_name=owner_doc["name"],
            date=entry_create.date,
            start_time=entry_create.start_time,
            end_time=entry_create.end_time,
            duration_hours=duration_hours(entry_create.start_time, entry_create.end_time),
            task_name=entry_create.task_name,
            task_category=entry_create.task_category,
            description=entry_create.description,
        )

        async with user_write_lock(owner_id):
            await self._check(candidate, entry_create.confirm_over_budget)
            await self.entries.insert_one(entry_to_doc(candidate))
        logger.info(
            "Entry %s logged for %s on %s (%.2fh)",
            candidate.id, owner_id, candidate.date, candidate.duration_hours,
        )

        return candidate

    async def update_entry(
        self,
        actor: User,
        entry_id: str,
        entry_update: TimesheetEntryUpdate,
    ) -> TimesheetEntry:
        """
        Edit an entry. Owner and user name never change; the duration is
        recomputed and the entry is re-validated without counting itself.

        Raises:
            NotFoundError: If entry not found
            PermissionDeniedError: If actor is neither owner nor manager
            EntryRejectedError: On overlap or weekly limit
            BudgetConfirmationRequired: If over budget and not confirmed
        """
        existing = await self._get_owned(actor, entry_id)

        changes = entry_update.model_dump(exclude_unset=True, exclude={"confirm_over_budget"})
        changes = {k: v for k, v in changes.items() if v is not None}
        merged = existing.model_copy(update=changes)
        candidate = merged.model_copy(
            update={"duration_hours": duration_hours(merged.start_time, merged.end_time)}
        )

        doc = entry_to_doc(candidate)
        del doc["_id"]
        del doc["manager_comment"]
        async with user_write_lock(existing.user_id):
            await self._check(candidate, entry_update.confirm_over_budget, exclude_id=entry_id)
            updated_doc = await self.entries.find_one_and_update(
                {"_id": entry_id},
                {"$set": doc},
                return_document=ReturnDocument.AFTER,
            )
        logger.info("Entry %s updated by %s", entry_id, actor.id)

        return self._doc_to_entry(updated_doc)

    async def set_manager_comment(
        self,
        actor: User,
        entry_id: str,
        comment: str,
    ) -> TimesheetEntry:
        """
        Attach manager feedback to an entry.

        Raises:
            PermissionDeniedError: If actor is not a manager
            NotFoundError: If entry not found
        """
        require_manager(actor, "comment on entries")

        updated_doc = await self.entries.find_one_and_update(
            {"_id": entry_id},
            {"$set": {"manager_comment": comment or ""}},
            return_document=ReturnDocument.AFTER,
        )
        if not updated_doc:
            raise NotFoundError("Time entry not found")

        logger.info("Manager %s commented on entry %s", actor.id, entry_id)
        return self._doc_to_entry(updated_doc)

    async def delete_entry(self, actor: User, entry_id: str) -> dict:
        """
        Delete an entry (hard delete).

        Raises:
            NotFoundError: If entry not found
            PermissionDeniedError: If actor is neither owner nor manager
        """
        await self._get_owned(actor, entry_id)

        result = await self.entries.delete_one({"_id": entry_id})
        logger.info("Entry %s deleted by %s", entry_id, actor.id)

        return {"deleted_count": result.deleted_count}
