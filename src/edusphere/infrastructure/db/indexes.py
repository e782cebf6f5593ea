import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from edusphere.infrastructure.db.active_scope import ACTIVE_FIELD
from edusphere.infrastructure.db.collections import (
    CATEGORIES,
    COURSES,
    ENROLLMENTS,
    INSTRUCTORS,
    LESSONS,
    USERS,
)

logger = logging.getLogger(__name__)

ONLY_ACTIVE = {ACTIVE_FIELD: True}


async def ensure_indexes(database: AsyncIOMotorDatabase[dict[str, Any]]) -> None:
    """Create the indexes the store relies on for uniqueness"""
    await database[USERS].create_index("username", unique=True)
    await database[USERS].create_index("email", unique=True)

    await database[INSTRUCTORS].create_index("user", unique=True)

    await database[CATEGORIES].create_index("name", unique=True)
    await database[CATEGORIES].create_index("slug", unique=True)

    await database[COURSES].create_index("slug", unique=True)
    await database[COURSES].create_index(
        [("instructor", ASCENDING), ("status", ASCENDING)],
    )
    await database[COURSES].create_index([("created_at", DESCENDING)])

    # deleted lessons and cancelled enrollments do not hold the slot
    await database[LESSONS].create_index(
        [("course", ASCENDING), ("order", ASCENDING)],
        unique=True,
        partialFilterExpression=ONLY_ACTIVE,
    )
    await database[ENROLLMENTS].create_index(
        [("user", ASCENDING), ("course", ASCENDING)],
        unique=True,
        partialFilterExpression=ONLY_ACTIVE,
    )

    logger.info("MongoDB indexes ensured")
