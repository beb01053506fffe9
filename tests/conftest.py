"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from chronoguard.main import app


@pytest.fixture
def make_entry():
    """Factory for TimesheetEntry objects with sensible defaults."""
    from chronoguard.models.timesheet import TimesheetEntry
    from chronoguard.utils.timecalc import duration_hours

    counter = {"n": 0}

    def _make(
        start_time="09:00",
        end_time="17:00",
        day=date(2025, 12, 1),
        user_id="u1",
        user_name="Thanh Vu",
        task_name="PMI: Migration",
        task_category="Development",
        description="",
        entry_id=None,
        hours=None,
    ):
        counter["n"] += 1
        return TimesheetEntry(
            _id=entry_id or str(counter["n"]),
            user_id=user_id,
            user_name=user_name,
            date=day,
            start_time=start_time,
            end_time=end_time,
            duration_hours=hours if hours is not None else duration_hours(start_time, end_time),
            task_name=task_name,
            task_category=task_category,
            description=description,
        )

    return _make


@pytest.fixture
def manager():
    from chronoguard.models.user import User

    return User(_id="m1", username="admin", name="Sarah Manager", role="Manager")


@pytest.fixture
def employee():
    from chronoguard.models.user import User

    return User(_id="u1", username="user", name="Thanh Vu", role="Employee")


@pytest_asyncio.fixture
async def test_db():
    """
    In-memory database seeded with one manager, two employees and one
    budgeted task.
    """
    client = AsyncMongoMockClient()
    db = client["chronoguard_test"]

    await db["users"].insert_many([
        {"_id": "m1", "username": "admin", "name": "Sarah Manager", "role": "Manager", "avatar": None},
        {"_id": "u1", "username": "user", "name": "Thanh Vu", "role": "Employee", "avatar": None},
        {"_id": "u2", "username": "jane", "name": "Jane Designer", "role": "Employee", "avatar": None},
    ])
    await db["tasks"].insert_one({
        "_id": "PMI",
        "name": "PMI: Migration",
        "estimated_hours": 36.5,
        "due_date": "2025-12-31",
        "status": "InProgress",
    })

    yield db


@pytest_asyncio.fixture
async def app_client(test_db):
    """
    Create a test client bound to the in-memory database.

    This fixture:
    - Points the database dependency at the seeded test database
    - Yields an async HTTP client for testing
    - Restores the original database afterwards
    """
    from chronoguard.database import database

    original_db = database.db
    database.db = test_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    database.db = original_db


async def _login(client: AsyncClient, username: str) -> dict:
    response = await client.post(
        "/auth/login", json={"username": username, "password": "123"}
    )
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def manager_headers(app_client):
    return await _login(app_client, "admin")


@pytest_asyncio.fixture
async def employee_headers(app_client):
    return await _login(app_client, "user")


@pytest_asyncio.fixture
async def other_employee_headers(app_client):
    return await _login(app_client, "jane")
