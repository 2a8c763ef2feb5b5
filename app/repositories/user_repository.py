# app/repositories/user_repository.py
"""
Users are the owners, not owned: lookups go by id or (lowercased) email.
"""

from typing import Any

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from app.db.helpers import to_object_id, with_db_retry
from app.models.domain.user_domain import UserRecord
from app.repositories.base import to_document, utcnow
from app.utils.errors import ConflictError, NotFoundError

EMAIL_TAKEN_MESSAGE = "Email already registered"


class UserRepository:
    collection_name = "users"

    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.collection = db[self.collection_name]

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def find_by_email(self, email: str) -> UserRecord | None:
        doc = await self.collection.find_one({"email": email.lower()})
        return UserRecord.model_validate(doc) if doc else None

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def find_by_id(self, user_id: str) -> UserRecord:
        doc = await self.collection.find_one({"_id": to_object_id(user_id, "User")})
        if doc is None:
            raise NotFoundError("User not found")
        return UserRecord.model_validate(doc)

    async def insert(self, fields: dict[str, Any]) -> UserRecord:
        now = utcnow()
        doc = {**to_document(fields), "createdAt": now, "updatedAt": now}
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(EMAIL_TAKEN_MESSAGE) from None
        doc["_id"] = result.inserted_id
        return UserRecord.model_validate(doc)

    async def update(self, user_id: str, set_fields: dict[str, Any] | None = None) -> UserRecord:
        """``$set`` the given fields (dotted paths allowed) and refresh ``updatedAt``."""
        doc = await self.collection.find_one_and_update(
            {"_id": to_object_id(user_id, "User")},
            {"$set": {**to_document(set_fields or {}), "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("User not found")
        return UserRecord.model_validate(doc)
