"""Backup service - SQL text export and import of the whole store.

The export is a plain SQL script (CREATE TABLE + one INSERT per row) with
camelCase column names in a fixed order. Imports are replayed in a scratch
in-memory SQLite database first, so a malformed script never touches the
stored data.
"""
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import ValidationError

from chronoguard.models.task import TaskDefinition
from chronoguard.models.timesheet import TimesheetEntry
from chronoguard.models.user import User, UserRole
from chronoguard.services.errors import BackupImportError
from chronoguard.services.permissions import require_manager
from chronoguard.services.task_service import TaskService
from chronoguard.services.timesheet_service import TimesheetService, entry_to_doc
from chronoguard.services.user_service import UserService

logger = logging.getLogger(__name__)

TABLES = ("users", "tasks", "timesheets")

SCHEMA = {
    "users": (
        ("id", "TEXT PRIMARY KEY"),
        ("username", "TEXT"),
        ("name", "TEXT"),
        ("role", "TEXT"),
        ("avatar", "TEXT"),
    ),
    "tasks": (
        ("id", "TEXT PRIMARY KEY"),
        ("name", "TEXT"),
        ("estimatedHours", "REAL"),
        ("dueDate", "TEXT"),
        ("status", "TEXT"),
    ),
    "timesheets": (
        ("id", "TEXT PRIMARY KEY"),
        ("userId", "TEXT"),
        ("userName", "TEXT"),
        ("date", "TEXT"),
        ("startTime", "TEXT"),
        ("endTime", "TEXT"),
        ("durationHours", "REAL"),
        ("taskName", "TEXT"),
        ("taskCategory", "TEXT"),
        ("description", "TEXT"),
        ("managerComment", "TEXT"),
    ),
}


def sql_literal(value) -> str:
    """
    Render a Python value as an SQL literal.

    Examples:
        >>> sql_literal(None)
        'NULL'
        >>> sql_literal("O'Brien")
        "'O''Brien'"
        >>> sql_literal(3.0)
        '3'
        >>> sql_literal(5.3)
        '5.3'
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, int):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def _user_row(user: User) -> tuple:
    return (user.id, user.username, user.name, user.role.value, user.avatar)


def _task_row(task: TaskDefinition) -> tuple:
    return (
        task.id,
        task.name,
        task.estimated_hours,
        task.due_date.isoformat() if task.due_date else None,
        task.status.value,
    )


def _entry_row(entry: TimesheetEntry) -> tuple:
    return (
        entry.id,
        entry.user_id,
        entry.user_name,
        entry.date.isoformat(),
        entry.start_time,
        entry.end_time,
        entry.duration_hours,
        entry.task_name,
        entry.task_category,
        entry.description,
        entry.manager_comment or "",
    )


def render_sql(
    users: Iterable[User],
    tasks: Iterable[TaskDefinition],
    entries: Iterable[TimesheetEntry],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the full backup script."""
    generated_at = generated_at or datetime.now(timezone.utc)
    rows = {
        "users": [_user_row(u) for u in users],
        "tasks": [_task_row(t) for t in tasks],
        "timesheets": [_entry_row(e) for e in entries],
    }

    lines = [
        "-- ChronoGuard DB Export",
        f"-- Date: {generated_at.isoformat()}",
        "",
    ]
    for table in TABLES:
        columns = ",\n".join(f"  {name} {kind}" for name, kind in SCHEMA[table])
        lines.append(f"CREATE TABLE {table} (\n{columns}\n);")
        lines.append("")

    for table in TABLES:
        names = ", ".join(name for name, _ in SCHEMA[table])
        lines.append(f"-- Data for {table}")
        for row in rows[table]:
            values = ", ".join(sql_literal(v) for v in row)
            lines.append(f"INSERT INTO {table} ({names}) VALUES ({values});")
        lines.append("")

    return "\n".join(lines)


def parse_sql(script: str) -> tuple[list[User], list[TaskDefinition], list[TimesheetEntry]]:
    """
    Replay a backup script in a scratch SQLite database and read it back.

    Older exports without a task ``status`` column or with a per-entry
    ``status`` column are accepted.

    Raises:
        BackupImportError: If the script fails or yields invalid rows
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    try:
        conn.executescript(script)
        users = [
            User(
                _id=row["id"],
                username=row["username"],
                name=row["name"],
                role=row["role"] or UserRole.EMPLOYEE,
                avatar=row["avatar"],
            )
            for row in conn.execute("SELECT * FROM users")
        ]
        tasks = []
        for row in conn.execute("SELECT * FROM tasks"):
            keys = row.keys()
            tasks.append(
                TaskDefinition(
                    _id=row["id"],
                    name=row["name"],
                    estimated_hours=row["estimatedHours"] or None,
                    due_date=row["dueDate"] or None,
                    status=(row["status"] if "status" in keys else None) or "ToDo",
                )
            )
        entries = [
            TimesheetEntry(
                _id=row["id"],
                user_id=row["userId"],
                user_name=row["userName"],
                date=row["date"],
                start_time=row["startTime"],
                end_time=row["endTime"],
                duration_hours=row["durationHours"] or 0,
                task_name=row["taskName"],
                task_category=row["taskCategory"],
                description=row["description"] or "",
                manager_comment=row["managerComment"] or "",
            )
            for row in conn.execute("SELECT * FROM timesheets")
        ]
    except (sqlite3.Error, ValidationError, IndexError) as e:
        raise BackupImportError(f"Invalid backup script: {e}")
    finally:
        conn.close()

    return users, tasks, entries


class BackupService:
    """Service for exporting and restoring the store as SQL text."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.user_service = UserService(db)
        self.task_service = TaskService(db)
        self.timesheet_service = TimesheetService(db)

    async def export_sql(self, actor: User, generated_at: Optional[datetime] = None) -> str:
        """
        Export every user, task and entry as an SQL script.

        Raises:
            PermissionDeniedError: If actor is not a manager
        """
        require_manager(actor, "export the database")

        script = render_sql(
            await self.user_service.list_users(),
            await self.task_service.list_tasks(),
            await self.timesheet_service.list_all_entries(),
            generated_at,
        )
        logger.info("Database exported by %s", actor.id)
        return script

    async def import_sql(self, actor: User, script: str) -> dict:
        """
        Replace the whole store with the contents of a backup script.

        The script is validated completely before any collection is cleared.

        Returns:
            Number of users, tasks and timesheets restored

        Raises:
            PermissionDeniedError: If actor is not a manager
            BackupImportError: If the script is malformed
        """
        require_manager(actor, "import a database backup")

        users, tasks, entries = parse_sql(script)
        docs = {
            "users": [
                {"_id": u.id, "username": u.username, "name": u.name,
                 "role": u.role.value, "avatar": u.avatar}
                for u in users
            ],
            "tasks": [
                {"_id": t.id, "name": t.name, "estimated_hours": t.estimated_hours,
                 "due_date": t.due_date.isoformat() if t.due_date else None,
                 "status": t.status.value}
                for t in tasks
            ],
            "timesheets": [entry_to_doc(e) for e in entries],
        }

        for table in TABLES:
            collection = self.db[table]
            await collection.delete_many({})
            if docs[table]:
                await collection.insert_many(docs[table])

        counts = {table: len(docs[table]) for table in TABLES}
        logger.info("Database imported by %s: %s", actor.id, counts)
        return counts
