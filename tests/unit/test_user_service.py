"""Tests for UserService."""
import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.mark.asyncio
class TestUserServiceDelete:
    """Tests for deleting users."""

    async def test_cannot_delete_self(self, manager):
        """Test that a manager cannot delete their own account."""
        from chronoguard.services.errors import PermissionDeniedError
        from chronoguard.services.user_service import UserService

        mock_db = MagicMock()
        mock_users = AsyncMock()
        mock_db.__getitem__.return_value = mock_users

        service = UserService(mock_db)

        with pytest.raises(PermissionDeniedError, match="own account"):
            await service.delete_user(manager, "m1")

        mock_users.delete_one.assert_not_called()

    async def test_employee_cannot_delete(self, employee):
        """Test that employees cannot delete users."""
        from chronoguard.services.errors import PermissionDeniedError
        from chronoguard.services.user_service import UserService

        mock_db = MagicMock()
        mock_db.__getitem__.return_value = AsyncMock()

        with pytest.raises(PermissionDeniedError, match="Only managers"):
            await UserService(mock_db).delete_user(employee, "u2")

    async def test_delete_success(self, test_db, manager):
        """Test that a manager deletes another user."""
        from chronoguard.services.user_service import UserService

        result = await UserService(test_db).delete_user(manager, "u2")

        assert result == {"deleted_count": 1}
        assert await test_db["users"].find_one({"_id": "u2"}) is None

    async def test_delete_missing(self, test_db, manager):
        """Test deleting an unknown user."""
        from chronoguard.services.errors import NotFoundError
        from chronoguard.services.user_service import UserService

        with pytest.raises(NotFoundError, match="User not found"):
            await UserService(test_db).delete_user(manager, "nobody")


@pytest.mark.asyncio
class TestUserServiceWrite:
    """Tests for creating and updating users."""

    async def test_create_user(self, test_db, manager):
        """Test creating a user with a generated id."""
        from chronoguard.models.user import UserCreate
        from chronoguard.services.user_service import UserService

        user = await UserService(test_db).create_user(
            manager, UserCreate(username="alex", name="Alex Dev")
        )

        assert user.id
        assert user.role.value == "Employee"
        assert (await test_db["users"].find_one({"_id": user.id}))["username"] == "alex"

    async def test_create_duplicate_username(self, test_db, manager):
        """Test that usernames are unique."""
        from chronoguard.models.user import UserCreate
        from chronoguard.services.user_service import UserService

        with pytest.raises(ValueError, match="Username already taken"):
            await UserService(test_db).create_user(
                manager, UserCreate(username="jane", name="Another Jane")
            )

    async def test_update_user(self, test_db, manager):
        """Test renaming and promoting a user."""
        from chronoguard.models.user import UserUpdate
        from chronoguard.services.user_service import UserService

        user = await UserService(test_db).update_user(
            manager, "u2", UserUpdate(name="Jane Lead", role="Manager")
        )

        assert user.name == "Jane Lead"
        assert user.is_manager

    async def test_update_username_clash(self, test_db, manager):
        """Test that renaming onto an existing username fails."""
        from chronoguard.models.user import UserUpdate
        from chronoguard.services.user_service import UserService

        with pytest.raises(ValueError, match="Username already taken"):
            await UserService(test_db).update_user(manager, "u2", UserUpdate(username="admin"))

    async def test_list_users_sorted_by_name(self, test_db):
        """Test listing users ordered by name."""
        from chronoguard.services.user_service import UserService

        users = await UserService(test_db).list_users()

        assert [u.id for u in users] == ["u2", "m1", "u1"]
