# app/services/post_service.py
"""
Post CRUD and the post lifecycle transitions.

The lifecycle itself is documented in app.models.domain.content_domain.
Publishing happens outside this service; the publisher reports back through
mark_published / mark_failed / update_metrics.
"""

from __future__ import annotations

from datetime import datetime

from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from app.db.helpers import to_object_id
from app.infrastructure.observability.logging import get_logger
from app.models.api.content_request import MetricsUpdate, PostCreate, PostPatch
from app.models.api.content_response import CalendarEvent
from app.models.domain.content_domain import (
    MAX_CONTENT_LENGTH,
    MAX_RETRY_ATTEMPTS,
    Post,
    PostMetrics,
    PostStatus,
)
from app.repositories.base import utcnow
from app.repositories.post_idea_repository import PostIdeaRepository
from app.repositories.post_repository import PostRepository
from app.utils.errors import AppError, ValidationError
from app.utils.time_windows import ensure_utc, start_of_week
from app.utils.validation import validate_enum, validate_string_length

logger = get_logger(__name__)

CALENDAR_TITLE_CHARS = 50


def _validate_content(content: str | None) -> str:
    return validate_string_length("Content", content, min_length=1, max_length=MAX_CONTENT_LENGTH)


class PostService:
    def __init__(self, db: AsyncDatabase):
        self.posts = PostRepository(db)
        self.ideas = PostIdeaRepository(db)

    async def create(self, user_id: str, data: PostCreate) -> Post:
        content = _validate_content(data.content)
        idea_oid = to_object_id(data.post_idea_id, "Post idea") if data.post_idea_id else None
        scheduled_at = ensure_utc(data.scheduled_at) if data.scheduled_at else None

        post = await self.posts.insert(
            user_id,
            {
                "post_idea_id": idea_oid,
                "content": content,
                "status": PostStatus.SCHEDULED if scheduled_at else PostStatus.DRAFT,
                "scheduled_at": scheduled_at,
                "metrics": PostMetrics(),
                "retry_count": 0,
            },
        )
        logger.info("Post created", user_id=user_id, post_id=post.id, status=post.status)

        if idea_oid is not None:
            await self._link_idea(user_id, str(idea_oid), post.id)

        return post

    async def _link_idea(self, user_id: str, idea_id: str, post_id: str) -> None:
        # Secondary write: the post stays created even if this fails
        try:
            await self.ideas.mark_used(user_id, idea_id, post_id)
        except (AppError, PyMongoError) as e:
            logger.warning(
                "Failed to mark post idea as used",
                user_id=user_id,
                post_id=post_id,
                post_idea_id=idea_id,
                error=str(e),
            )

    async def list(
        self,
        user_id: str,
        status: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[Post]:
        filters: dict = {}
        if status:
            filters["status"] = validate_enum("status", status, PostStatus).value
        if start_date or end_date:
            created: dict = {}
            if start_date:
                created["$gte"] = ensure_utc(start_date)
            if end_date:
                created["$lte"] = ensure_utc(end_date)
            filters["createdAt"] = created
        return await self.posts.list_owned(user_id, filters, sort=[("createdAt", DESCENDING)])

    async def get(self, user_id: str, post_id: str) -> Post:
        return await self.posts.find_owned(user_id, post_id)

    async def update(self, user_id: str, post_id: str, patch: PostPatch) -> Post:
        fields = patch.changes()
        if "content" in fields:
            fields["content"] = _validate_content(fields["content"])
        return await self.posts.update_owned(user_id, post_id, fields)

    async def delete(self, user_id: str, post_id: str) -> None:
        await self.posts.delete_owned(user_id, post_id)
        logger.info("Post deleted", user_id=user_id, post_id=post_id)

    async def schedule(self, user_id: str, post_id: str, scheduled_at: datetime) -> Post:
        """Set status to scheduled from any state; calling again just moves the time."""
        post = await self.posts.update_owned(
            user_id,
            post_id,
            {"status": PostStatus.SCHEDULED, "scheduled_at": ensure_utc(scheduled_at)},
        )
        logger.info("Post scheduled", user_id=user_id, post_id=post_id, scheduled_at=post.scheduled_at)
        return post

    async def retry_failed(self, user_id: str, post_id: str) -> Post:
        post = await self.posts.find_owned(user_id, post_id)

        if post.status != PostStatus.FAILED:
            raise ValidationError("Only failed posts can be retried")
        if post.retry_count >= MAX_RETRY_ATTEMPTS:
            raise ValidationError("Maximum retry attempts reached")

        # retryCount is advanced by mark_failed, not here
        post = await self.posts.update_owned(user_id, post_id, {"status": PostStatus.SCHEDULED})
        logger.info("Failed post rescheduled", user_id=user_id, post_id=post_id, retry_count=post.retry_count)
        return post

    async def mark_published(
        self,
        post_id: str,
        linkedin_post_id: str | None = None,
        linkedin_url: str | None = None,
    ) -> Post:
        fields = {
            "status": PostStatus.PUBLISHED,
            "published_at": utcnow(),
            "error_message": None,
        }
        if linkedin_post_id:
            fields["linkedin_post_id"] = linkedin_post_id
        if linkedin_url:
            fields["linkedin_url"] = linkedin_url

        post = await self.posts.update_by_id(post_id, fields)
        logger.info("Post published", post_id=post_id, linkedin_post_id=linkedin_post_id)
        return post

    async def mark_failed(self, post_id: str, error_message: str) -> Post:
        """
        Record a failed publish attempt of a scheduled post.

        retryCount is incremented in the same update and never goes past
        MAX_RETRY_ATTEMPTS.

        Raises:
            ValidationError: If the post is not scheduled
        """
        current = await self.posts.find_by_id(post_id)
        if current.status != PostStatus.SCHEDULED:
            raise ValidationError("Only scheduled posts can be marked as failed")

        inc = {"retry_count": 1} if current.retry_count < MAX_RETRY_ATTEMPTS else None
        post = await self.posts.update_if_status(
            post_id,
            PostStatus.SCHEDULED,
            {"status": PostStatus.FAILED, "error_message": (error_message or "")[:500]},
            inc=inc,
        )
        if post is None:
            raise ValidationError("Only scheduled posts can be marked as failed")

        logger.warning(
            "Post publish failed",
            post_id=post_id,
            retry_count=post.retry_count,
            error=post.error_message,
        )
        return post

    async def update_metrics(self, post_id: str, metrics: MetricsUpdate) -> Post:
        return await self.posts.update_by_id(
            post_id,
            {"metrics": PostMetrics(**metrics.model_dump(), last_updated=utcnow())},
        )

    async def get_weekly_count(
        self, user_id: str, timezone: str | None = None, now: datetime | None = None
    ) -> int:
        """Scheduled or published posts created since this week's Monday."""
        week_start = start_of_week(now, timezone)
        return await self.posts.count_created_since(user_id, week_start)

    async def get_calendar_events(self, user_id: str) -> list[CalendarEvent]:
        events = []
        for post in await self.posts.list_calendar(user_id):
            when = post.scheduled_at or post.published_at
            events.append(
                CalendarEvent(
                    id=post.id,
                    title=f"LinkedIn Post: {post.content[:CALENDAR_TITLE_CHARS]}...",
                    start_time=when,
                    # Posts are instant events
                    end_time=when,
                    description=post.content,
                    post_id=post.id,
                    status=post.status.value,
                )
            )
        return events
