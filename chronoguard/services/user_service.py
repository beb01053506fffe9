"""User service - business logic for user management."""
import logging
from typing import Optional

from bson import ObjectId

from chronoguard.models.user import User, UserCreate, UserUpdate
from chronoguard.services.errors import NotFoundError, PermissionDeniedError
from chronoguard.services.permissions import require_manager

logger = logging.getLogger(__name__)


class UserService:
    """Service for handling user operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        """Convert database document to User model."""
        return User(
            _id=doc["_id"],
            username=doc["username"],
            name=doc["name"],
            role=doc["role"],
            avatar=doc.get("avatar"),
        )

    async def list_users(self) -> list[User]:
        """List every user ordered by display name."""
        cursor = self.users.find({}).sort("name", 1)
        docs = await cursor.to_list(length=None)
        return [self._doc_to_user(doc) for doc in docs]

    async def get_user(self, user_id: str) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If user not found
        """
        doc = await self.users.find_one({"_id": user_id})
        if not doc:
            raise NotFoundError("User not found")
        return self._doc_to_user(doc)

    async def get_by_username(self, username: str) -> Optional[User]:
        doc = await self.users.find_one({"username": username})
        return self._doc_to_user(doc) if doc else None

    async def create_user(self, actor: User, user_create: UserCreate) -> User:
        """
        Create a new user.

        Args:
            actor: User performing the operation (must be a manager)
            user_create: User creation data

        Returns:
            Created user

        Raises:
            PermissionDeniedError: If actor is not a manager
            ValueError: If the id or username is already taken
        """
        require_manager(actor, "create users")

        user_id = user_create.id or str(ObjectId())
        if await self.users.find_one({"_id": user_id}):
            raise ValueError("User ID already exists")
        if await self.users.find_one({"username": user_create.username}):
            raise ValueError("Username already taken")

        user_doc = {
            "_id": user_id,
            "username": user_create.username,
            "name": user_create.name,
            "role": user_create.role.value,
            "avatar": user_create.avatar,
        }
        await self.users.insert_one(user_doc)
        logger.info("User %s (%s) created by %s", user_id, user_create.username, actor.id)

        return self._doc_to_user(user_doc)

    async def update_user(self, actor: User, user_id: str, user_update: UserUpdate) -> User:
        """
        Update a user. Entries keep the user name they were logged with.

        Raises:
            PermissionDeniedError: If actor is not a manager
            NotFoundError: If user not found
            ValueError: If the new username is already taken
        """
        require_manager(actor, "edit users")
        await self.get_user(user_id)

        update_doc = {}
        if user_update.username is not None:
            clash = await self.users.find_one(
                {"username": user_update.username, "_id": {"$ne": user_id}}
            )
            if clash:
                raise ValueError("Username already taken")
            update_doc["username"] = user_update.username
        if user_update.name is not None:
            update_doc["name"] = user_update.name
        if user_update.role is not None:
            update_doc["role"] = user_update.role.value
        if user_update.avatar is not None:
            update_doc["avatar"] = user_update.avatar

        if update_doc:
            await self.users.update_one({"_id": user_id}, {"$set": update_doc})
            logger.info("User %s updated by %s", user_id, actor.id)

        return await self.get_user(user_id)

    async def delete_user(self, actor: User, user_id: str) -> dict:
        """
        Delete a user. Their timesheet entries are kept.

        Raises:
            PermissionDeniedError: If actor is not a manager or targets themselves
            NotFoundError: If user not found
        """
        require_manager(actor, "delete users")
        if user_id == actor.id:
            raise PermissionDeniedError("You cannot delete your own account")

        await self.get_user(user_id)
        result = await self.users.delete_one({"_id": user_id})
        logger.info("User %s deleted by %s", user_id, actor.id)

        return {"deleted_count": result.deleted_count}
