# app/repositories/base.py
"""
Shared persistence for owned documents.

Every query issued here carries the owner's ``userId``; a document that
exists but belongs to someone else is reported exactly like a missing one.
Field names are converted from snake_case to the stored camelCase.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from bson import ObjectId
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from app.db.helpers import to_object_id, with_db_retry
from app.utils.errors import NotFoundError

M = TypeVar("M", bound=BaseModel)

Sort = list[tuple[str, int]]


def utcnow() -> datetime:
    # Mongo stores milliseconds; keep in-memory values identical to stored ones
    now = datetime.now(UTC)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def encode_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return encode_value(value.model_dump(by_alias=True))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [encode_value(item) for item in value]
    return value


def _camel_key(key: str) -> str:
    return ".".join(to_camel(part) for part in key.split("."))


def to_document(fields: dict[str, Any]) -> dict[str, Any]:
    """snake_case python fields (dotted paths allowed) -> camelCase document keys."""
    return {_camel_key(key): encode_value(value) for key, value in fields.items()}


class OwnedRepository(Generic[M]):
    """CRUD over a collection whose documents carry a ``userId``."""

    collection_name: str
    model: type[M]
    entity_name: str = "Resource"

    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.collection = db[self.collection_name]

    def _owned(self, user_id: str, entity_id: str | ObjectId) -> dict[str, Any]:
        return {
            "_id": to_object_id(entity_id, self.entity_name),
            "userId": to_object_id(user_id, self.entity_name),
        }

    def _scoped(self, user_id: str, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        return {**(filters or {}), "userId": to_object_id(user_id, "User")}

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.entity_name} not found")

    def _load(self, doc: dict[str, Any]) -> M:
        return self.model.model_validate(doc)

    async def insert(self, user_id: str, fields: dict[str, Any]) -> M:
        now = utcnow()
        doc = {
            **to_document(fields),
            "userId": to_object_id(user_id, "User"),
            "createdAt": now,
            "updatedAt": now,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._load(doc)

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def find_owned(self, user_id: str, entity_id: str) -> M:
        doc = await self.collection.find_one(self._owned(user_id, entity_id))
        if doc is None:
            raise self._not_found()
        return self._load(doc)

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def list_owned(
        self, user_id: str, filters: dict[str, Any] | None = None, sort: Sort | None = None
    ) -> list[M]:
        cursor = self.collection.find(self._scoped(user_id, filters), sort=sort)
        return [self._load(doc) async for doc in cursor]

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def count_owned(self, user_id: str, filters: dict[str, Any] | None = None) -> int:
        return await self.collection.count_documents(self._scoped(user_id, filters))

    async def _find_one_and_update(
        self,
        query: dict[str, Any],
        set_fields: dict[str, Any] | None = None,
        *,
        push: dict[str, Any] | None = None,
        add_to_set: dict[str, Any] | None = None,
        inc: dict[str, int] | None = None,
    ) -> M:
        update: dict[str, Any] = {"$set": {**to_document(set_fields or {}), "updatedAt": utcnow()}}
        if push:
            update["$push"] = to_document(push)
        if add_to_set:
            update["$addToSet"] = to_document(add_to_set)
        if inc:
            update["$inc"] = to_document(inc)

        doc = await self.collection.find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise self._not_found()
        return self._load(doc)

    async def update_owned(
        self,
        user_id: str,
        entity_id: str,
        set_fields: dict[str, Any] | None = None,
        **operators: Any,
    ) -> M:
        """
        Apply ``$set`` (plus optional ``push``/``add_to_set``/``inc``) in one
        atomic request and return the document as it is after the update.
        """
        return await self._find_one_and_update(
            self._owned(user_id, entity_id), set_fields, **operators
        )

    async def update_by_id(
        self, entity_id: str, set_fields: dict[str, Any] | None = None, **operators: Any
    ) -> M:
        """Unscoped update for trusted internal callers (publishing jobs)."""
        query = {"_id": to_object_id(entity_id, self.entity_name)}
        return await self._find_one_and_update(query, set_fields, **operators)

    async def delete_owned(self, user_id: str, entity_id: str) -> None:
        result = await self.collection.delete_one(self._owned(user_id, entity_id))
        if result.deleted_count == 0:
            raise self._not_found()
