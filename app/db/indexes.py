# app/db/indexes.py
"""
Index definitions for every collection, created idempotently at startup.
"""

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.asynchronous.database import AsyncDatabase

from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

COLLECTION_INDEXES: dict[str, list[IndexModel]] = {
    "users": [
        IndexModel([("email", ASCENDING)], unique=True),
        IndexModel([("weekStartDate", ASCENDING)]),
    ],
    "postIdeas": [
        IndexModel([("userId", ASCENDING), ("status", ASCENDING)]),
        IndexModel([("userId", ASCENDING), ("createdAt", DESCENDING)]),
    ],
    "posts": [
        IndexModel([("userId", ASCENDING), ("status", ASCENDING)]),
        IndexModel([("userId", ASCENDING), ("scheduledAt", ASCENDING)]),
        IndexModel([("userId", ASCENDING), ("createdAt", DESCENDING)]),
        IndexModel([("scheduledAt", ASCENDING)]),
    ],
    "jobOpportunities": [
        IndexModel([("userId", ASCENDING), ("stage", ASCENDING)]),
        IndexModel([("userId", ASCENDING), ("createdAt", DESCENDING)]),
        IndexModel([("recruiterId", ASCENDING)]),
    ],
    "appointments": [
        IndexModel([("userId", ASCENDING), ("startTime", ASCENDING)]),
        IndexModel([("userId", ASCENDING), ("type", ASCENDING), ("startTime", ASCENDING)]),
        IndexModel([("startTime", ASCENDING)]),
    ],
    "recruiters": [
        IndexModel([("userId", ASCENDING), ("status", ASCENDING)]),
        IndexModel(
            [("userId", ASCENDING), ("linkedinProfileUrl", ASCENDING)],
            unique=True,
        ),
        IndexModel([("userId", ASCENDING), ("connectionWeek", ASCENDING)]),
        IndexModel([("userId", ASCENDING), ("discoveredAt", DESCENDING)]),
    ],
}


async def ensure_indexes(db: AsyncDatabase) -> None:
    """Create all indexes; existing identical indexes are left untouched."""
    for collection_name, indexes in COLLECTION_INDEXES.items():
        names = await db[collection_name].create_indexes(indexes)
        logger.debug("Indexes ensured", collection=collection_name, indexes=names)

    logger.info("Database indexes ensured", collections=len(COLLECTION_INDEXES))
