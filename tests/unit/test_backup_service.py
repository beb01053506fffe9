"""Tests for BackupService against the database."""
import pytest


@pytest.mark.asyncio
class TestBackupService:
    """Tests for export and import of the whole store."""

    async def test_export_then_import_round_trip(self, test_db, manager, employee):
        """Test that restoring an export reproduces the same rows."""
        from chronoguard.models.timesheet import TimesheetEntryCreate
        from chronoguard.services.backup_service import BackupService
        from chronoguard.services.timesheet_service import TimesheetService

        timesheets = TimesheetService(test_db)
        entry = await timesheets.create_entry(
            employee,
            TimesheetEntryCreate(date="2025-12-01", start_time="09:00", end_time="12:00",
                                 task_name="PMI: Migration", description="Setup"),
        )
        await timesheets.set_manager_comment(manager, entry.id, "Thanks")

        service = BackupService(test_db)
        script = await service.export_sql(manager)
        before = {
            name: sorted(await test_db[name].find({}).to_list(length=None), key=lambda d: d["_id"])
            for name in ("users", "tasks", "timesheets")
        }

        await test_db["timesheets"].delete_many({})
        counts = await service.import_sql(manager, script)

        assert counts == {"users": 3, "tasks": 1, "timesheets": 1}
        for name, docs in before.items():
            after = sorted(await test_db[name].find({}).to_list(length=None), key=lambda d: d["_id"])
            assert after == docs

    async def test_malformed_import_keeps_state(self, test_db, manager):
        """Test that a failing script leaves every collection untouched."""
        from chronoguard.services.backup_service import BackupService
        from chronoguard.services.errors import BackupImportError

        with pytest.raises(BackupImportError):
            await BackupService(test_db).import_sql(manager, "DROP TABLE users; garbage;")

        assert await test_db["users"].count_documents({}) == 3
        assert await test_db["tasks"].count_documents({}) == 1

    async def test_employee_cannot_export(self, test_db, employee):
        """Test that backups are manager-only."""
        from chronoguard.services.backup_service import BackupService
        from chronoguard.services.errors import PermissionDeniedError

        with pytest.raises(PermissionDeniedError):
            await BackupService(test_db).export_sql(employee)
        with pytest.raises(PermissionDeniedError):
            await BackupService(test_db).import_sql(employee, "")
