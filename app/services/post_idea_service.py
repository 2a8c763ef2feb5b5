# app/services/post_idea_service.py
from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from app.infrastructure.observability.logging import get_logger
from app.models.api.content_request import PostIdeaCreate, PostIdeaPatch
from app.models.domain.content_domain import MAX_TAGS, PostIdea, PostIdeaStatus
from app.repositories.post_idea_repository import PostIdeaRepository
from app.utils.validation import validate_enum, validate_string_length, validate_tags

logger = get_logger(__name__)


def _validate_fields(fields: dict) -> None:
    if "title" in fields:
        validate_string_length("Title", fields["title"], min_length=1, max_length=200)
    if "description" in fields:
        validate_string_length("Description", fields["description"], max_length=2000)
    if "tags" in fields:
        fields["tags"] = validate_tags(fields["tags"], max_tags=MAX_TAGS)


class PostIdeaService:
    def __init__(self, db: AsyncDatabase):
        self.ideas = PostIdeaRepository(db)

    async def create(self, user_id: str, data: PostIdeaCreate) -> PostIdea:
        fields = data.model_dump()
        _validate_fields(fields)

        idea = await self.ideas.insert(
            user_id, {**fields, "status": PostIdeaStatus.ACTIVE, "used_in_post_ids": []}
        )
        logger.info("Post idea created", user_id=user_id, post_idea_id=idea.id)
        return idea

    async def list(
        self, user_id: str, status: str | None = None, tag: str | None = None
    ) -> list[PostIdea]:
        filters: dict = {}
        if status:
            filters["status"] = validate_enum("status", status, PostIdeaStatus).value
        if tag:
            filters["tags"] = tag
        return await self.ideas.list_owned(user_id, filters, sort=[("createdAt", DESCENDING)])

    async def get(self, user_id: str, idea_id: str) -> PostIdea:
        return await self.ideas.find_owned(user_id, idea_id)

    async def update(self, user_id: str, idea_id: str, patch: PostIdeaPatch) -> PostIdea:
        fields = patch.changes()
        _validate_fields(fields)
        return await self.ideas.update_owned(user_id, idea_id, fields)

    async def delete(self, user_id: str, idea_id: str) -> None:
        await self.ideas.delete_owned(user_id, idea_id)
        logger.info("Post idea deleted", user_id=user_id, post_idea_id=idea_id)

    async def mark_used(self, user_id: str, idea_id: str, post_id: str) -> PostIdea:
        return await self.ideas.mark_used(user_id, idea_id, post_id)
