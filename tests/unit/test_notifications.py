"""Tests for the notification deriver."""
from datetime import date


class TestDeriveNotifications:
    """Tests for overdue and overtime notifications."""

    def test_overdue_and_overtime(self, make_entry):
        """Test one notification per task per type with severities."""
        from chronoguard.models.task import TaskDefinition
        from chronoguard.services.notifications import derive_notifications

        tasks = [
            TaskDefinition(_id="A", name="A: Late", due_date=date(2025, 12, 1), status="InProgress"),
            TaskDefinition(_id="B", name="B: Big", estimated_hours=5),
            TaskDefinition(_id="C", name="C: Fine", estimated_hours=50, due_date=date(2026, 1, 1)),
        ]
        entries = [
            make_entry(hours=3, task_name="B: Big"),
            make_entry(hours=3, task_name="B: Big", day=date(2025, 12, 2)),
            make_entry(hours=3, task_name="C: Fine"),
        ]

        result = derive_notifications(tasks, entries, date(2025, 12, 10))

        assert [(n.id, n.type.value, n.severity.value) for n in result] == [
            ("overdue-A", "OVERDUE", "high"),
            ("overtime-B", "OVERTIME", "medium"),
        ]
        assert "2025-12-01" in result[0].message
        assert "6.0h" in result[1].message

    def test_done_task_not_overdue(self):
        """Test that finished tasks raise no overdue alert."""
        from chronoguard.models.task import TaskDefinition
        from chronoguard.services.notifications import derive_notifications

        tasks = [TaskDefinition(_id="A", name="A: Late", due_date=date(2025, 1, 1), status="Done")]

        assert derive_notifications(tasks, [], date(2025, 12, 10)) == []

    def test_exactly_at_budget_is_not_overtime(self, make_entry):
        """Test that hitting the estimate exactly is not an overrun."""
        from chronoguard.models.task import TaskDefinition
        from chronoguard.services.notifications import derive_notifications

        tasks = [TaskDefinition(_id="B", name="B: Big", estimated_hours=6)]
        entries = [make_entry(hours=6, task_name="B: Big")]

        assert derive_notifications(tasks, entries, date(2025, 12, 10)) == []

    def test_fractional_hours_at_budget_is_not_overtime(self, make_entry):
        """Test that float drift from 2h20m entries does not trigger an alert."""
        from chronoguard.models.task import TaskDefinition
        from chronoguard.services.notifications import derive_notifications

        tasks = [TaskDefinition(_id="B", name="B: Big", estimated_hours=7)]
        entries = [
            make_entry("09:00", "11:20", day=date(2025, 12, d), task_name="B: Big")
            for d in (1, 2, 3)
        ]

        assert derive_notifications(tasks, entries, date(2025, 12, 10)) == []
