# app/repositories/post_repository.py
from datetime import datetime
from typing import Any

from pymongo import ASCENDING

from app.db.helpers import to_object_id, with_db_retry
from app.models.domain.content_domain import QUOTA_POST_STATUSES, Post, PostStatus
from app.repositories.base import OwnedRepository
from app.utils.errors import NotFoundError


class PostRepository(OwnedRepository[Post]):
    collection_name = "posts"
    model = Post
    entity_name = "Post"

    async def count_created_since(
        self, user_id: str, since: datetime, statuses=QUOTA_POST_STATUSES
    ) -> int:
        return await self.count_owned(
            user_id,
            {
                "createdAt": {"$gte": since},
                "status": {"$in": [status.value for status in statuses]},
            },
        )

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def list_calendar(self, user_id: str) -> list[Post]:
        """Scheduled and published posts that carry a date to place them on."""
        query = self._scoped(
            user_id,
            {
                "status": {"$in": [PostStatus.SCHEDULED.value, PostStatus.PUBLISHED.value]},
                "$or": [
                    {"scheduledAt": {"$ne": None}},
                    {"publishedAt": {"$ne": None}},
                ],
            },
        )
        cursor = self.collection.find(query, sort=[("scheduledAt", ASCENDING)])
        return [self._load(doc) async for doc in cursor]

    @with_db_retry(max_retries=3, base_delay=0.1)
    async def find_by_id(self, post_id: str) -> Post:
        doc = await self.collection.find_one({"_id": to_object_id(post_id, self.entity_name)})
        if doc is None:
            raise self._not_found()
        return self._load(doc)

    async def update_if_status(
        self, post_id: str, status: PostStatus, set_fields: dict[str, Any], **operators: Any
    ) -> Post | None:
        """Update only while the post is still in ``status``; None when it has moved on."""
        query = {"_id": to_object_id(post_id, self.entity_name), "status": status.value}
        try:
            return await self._find_one_and_update(query, set_fields, **operators)
        except NotFoundError:
            return None
