"""Tests for Pydantic models."""
import pytest
from datetime import date
from pydantic import ValidationError


class TestUserModel:
    """Tests for User models."""

    def test_user_role_enum_values(self):
        """Test UserRole enum values match the stored strings."""
        from chronoguard.models.user import UserRole

        assert UserRole.MANAGER.value == "Manager"
        assert UserRole.EMPLOYEE.value == "Employee"

    def test_user_create_defaults(self):
        """Test that new users default to Employee with no id."""
        from chronoguard.models.user import UserCreate

        user = UserCreate(username="alex", name="Alex Dev")

        assert user.role.value == "Employee"
        assert user.id is None
        assert user.avatar is None

    def test_user_serializes_id(self):
        """Test that the database _id is exposed as id."""
        from chronoguard.models.user import User

        user = User(_id="m1", username="admin", name="Sarah Manager", role="Manager")

        assert user.model_dump(by_alias=True)["id"] == "m1"
        assert user.is_manager is True


class TestTaskModel:
    """Tests for task models."""

    def test_task_status_enum_values(self):
        """Test TaskStatus enum values."""
        from chronoguard.models.task import TaskStatus

        assert TaskStatus.TODO.value == "ToDo"
        assert TaskStatus.IN_PROGRESS.value == "InProgress"
        assert TaskStatus.DONE.value == "Done"

    def test_task_budget(self):
        """Test that absent or zero estimates mean no budget."""
        from chronoguard.models.task import TaskDefinition

        assert TaskDefinition(_id="A", name="A: x").budget is None
        assert TaskDefinition(_id="A", name="A: x", estimated_hours=0).budget is None
        assert TaskDefinition(_id="A", name="A: x", estimated_hours=36.5).budget == 36.5

    def test_negative_estimate_rejected(self):
        """Test that estimates cannot be negative."""
        from chronoguard.models.task import TaskCreate

        with pytest.raises(ValidationError):
            TaskCreate(code="A", title="B", estimated_hours=-1)


class TestTimesheetModel:
    """Tests for timesheet entry models."""

    def test_entry_create_minimal(self):
        """Test creating an entry with the required fields only."""
        from chronoguard.models.timesheet import TimesheetEntryCreate

        entry = TimesheetEntryCreate(
            date="2025-12-01", start_time="09:00", end_time="11:20", task_name="PMI: Migration"
        )

        assert entry.date == date(2025, 12, 1)
        assert entry.task_category == "Development"
        assert entry.description == ""
        assert entry.user_id is None
        assert entry.confirm_over_budget is False

    def test_entry_rejects_bad_times(self):
        """Test that times must be zero-padded 24-hour HH:mm."""
        from chronoguard.models.timesheet import TimesheetEntryCreate

        for bad in ["9:00", "24:00", "12:60", "noon"]:
            with pytest.raises(ValidationError):
                TimesheetEntryCreate(
                    date="2025-12-01", start_time=bad, end_time="17:00", task_name="T"
                )

    def test_entry_update_all_optional(self):
        """Test that an empty update is valid."""
        from chronoguard.models.timesheet import TimesheetEntryUpdate

        update = TimesheetEntryUpdate()

        assert update.model_dump(exclude_unset=True) == {}

    def test_validation_outcome_ok(self):
        """Test the default validation outcome."""
        from chronoguard.models.timesheet import ValidationOutcome

        assert ValidationOutcome().ok is True
        assert ValidationOutcome(status="rejected", reason="x").ok is False
