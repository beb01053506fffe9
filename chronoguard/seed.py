"""Seed data inserted into an empty store on first start."""
import logging

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"_id": "m1", "username": "admin", "name": "Sarah Manager", "role": "Manager", "avatar": None},
    {"_id": "u1", "username": "user", "name": "Thanh Vu", "role": "Employee", "avatar": None},
]

SEED_TASKS = [
    {
        "_id": "PMI",
        "name": "PMI: Implement Migration WCF HttpExternalHost project to WebAPI .NET8",
        "estimated_hours": 36.5,
        "due_date": None,
        "status": "InProgress",
    },
]


async def seed_database(db) -> bool:
    """
    Insert the seed users and tasks when no user exists yet.

    Returns:
        True if seed data was inserted
    """
    if await db["users"].count_documents({}) > 0:
        return False

    await db["users"].insert_many([dict(doc) for doc in SEED_USERS])
    if await db["tasks"].count_documents({}) == 0:
        await db["tasks"].insert_many([dict(doc) for doc in SEED_TASKS])

    logger.info("Seeded %d users and %d tasks", len(SEED_USERS), len(SEED_TASKS))
    return True
