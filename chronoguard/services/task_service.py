"""Task service - business logic for task definitions."""
import logging

from chronoguard.models.task import TaskCreate, TaskDefinition, TaskUpdate
from chronoguard.models.user import User
from chronoguard.services.errors import NotFoundError
from chronoguard.services.permissions import require_manager

logger = logging.getLogger(__name__)


def task_display_name(task_id: str, title: str) -> str:
    """
    Build the name entries are logged against.

    Examples:
        >>> task_display_name("PROJ-101", "Authentication System")
        'PROJ-101: Authentication System'
    """
    return f"{task_id}: {title.strip()}"


class TaskService:
    """Service for handling task definitions."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.tasks = db["tasks"]

    def _doc_to_task(self, doc: dict) -> TaskDefinition:
        """Convert database document to TaskDefinition model."""
        return TaskDefinition(
            _id=doc["_id"],
            name=doc["name"],
            estimated_hours=doc.get("estimated_hours"),
            due_date=doc.get("due_date"),
            status=doc.get("status") or "ToDo",
        )

    async def list_tasks(self) -> list[TaskDefinition]:
        """List every task ordered by id."""
        cursor = self.tasks.find({}).sort("_id", 1)
        docs = await cursor.to_list(length=None)
        return [self._doc_to_task(doc) for doc in docs]

    async def get_task(self, task_id: str) -> TaskDefinition:
        """
        Get a task by ID.

        Raises:
            NotFoundError: If task not found
        """
        doc = await self.tasks.find_one({"_id": task_id})
        if not doc:
            raise NotFoundError("Task not found")
        return self._doc_to_task(doc)

    async def create_task(self, actor: User, task_create: TaskCreate) -> TaskDefinition:
        """
        Create a new task.

        The id is the upper-cased code; an estimate of 0 is stored as "no
        budget".

        Raises:
            PermissionDeniedError: If actor is not a manager
            ValueError: If the task id already exists
        """
        require_manager(actor, "manage tasks")

        task_id = task_create.code.strip().upper()
        if await self.tasks.find_one({"_id": task_id}):
            raise ValueError(f"Task {task_id} already exists")

        task_doc = {
            "_id": task_id,
            "name": task_display_name(task_id, task_create.title),
            "estimated_hours": task_create.estimated_hours or None,
            "due_date": task_create.due_date.isoformat() if task_create.due_date else None,
            "status": task_create.status.value,
        }
        await self.tasks.insert_one(task_doc)
        logger.info("Task %s created by %s", task_id, actor.id)

        return self._doc_to_task(task_doc)

    async def update_task(
        self,
        actor: User,
        task_id: str,
        task_update: TaskUpdate,
    ) -> TaskDefinition:
        """
        Update a task. The id never changes; a new title rebuilds the name.

        Fields explicitly sent as null are cleared (estimate, due date).

        Raises:
            PermissionDeniedError: If actor is not a manager
            NotFoundError: If task not found
        """
        require_manager(actor, "manage tasks")
        await self.get_task(task_id)

        changes = task_update.model_dump(exclude_unset=True)
        update_doc = {}

        if changes.get("title") is not None:
            update_doc["name"] = task_display_name(task_id, changes["title"])
        if "estimated_hours" in changes:
            update_doc["estimated_hours"] = changes["estimated_hours"] or None
        if "due_date" in changes:
            due = changes["due_date"]
            update_doc["due_date"] = due.isoformat() if due else None
        if changes.get("status") is not None:
            update_doc["status"] = changes["status"].value

        if update_doc:
            await self.tasks.update_one({"_id": task_id}, {"$set": update_doc})
            logger.info("Task %s updated by %s: %s", task_id, actor.id, sorted(update_doc))

        return await self.get_task(task_id)

    async def delete_task(self, actor: User, task_id: str) -> dict:
        """
        Delete a task. Entries logged against it keep its name.

        Raises:
            PermissionDeniedError: If actor is not a manager
            NotFoundError: If task not found
        """
        require_manager(actor, "manage tasks")
        await self.get_task(task_id)

        result = await self.tasks.delete_one({"_id": task_id})
        logger.info("Task %s deleted by %s", task_id, actor.id)

        return {"deleted_count": result.deleted_count}
