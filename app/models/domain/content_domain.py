"""
Post ideas and posts.

Post lifecycle:

    draft ──schedule──► scheduled ──publish──► published
                           │   ▲
                     fail  │   │ retry (retryCount < MAX_RETRY_ATTEMPTS)
                           ▼   │
                          failed

``schedule`` is accepted from any state. ``retryCount`` is incremented by the
publishing side when it records a failure, never by the retry itself.
"""

from enum import StrEnum

from pydantic import Field

from app.models.domain.base import DomainModel, ObjectIdStr, OwnedDocument, UTCDateTime

MAX_CONTENT_LENGTH = 3000
MAX_RETRY_ATTEMPTS = 3
MAX_TAGS = 10


class PostIdeaStatus(StrEnum):
    ACTIVE = "active"
    USED = "used"
    ARCHIVED = "archived"


class PostStatus(StrEnum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    FAILED = "failed"


# Statuses that consume the weekly post quota
QUOTA_POST_STATUSES = (PostStatus.SCHEDULED, PostStatus.PUBLISHED)


class PostIdea(OwnedDocument):
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    status: PostIdeaStatus = PostIdeaStatus.ACTIVE
    used_in_post_ids: list[ObjectIdStr] = Field(default_factory=list)


class PostMetrics(DomainModel):
    likes: int = 0
    comments: int = 0
    shares: int = 0
    last_updated: UTCDateTime | None = None


class Post(OwnedDocument):
    post_idea_id: ObjectIdStr | None = None
    content: str
    status: PostStatus
    scheduled_at: UTCDateTime | None = None
    published_at: UTCDateTime | None = None
    linkedin_post_id: str | None = None
    linkedin_url: str | None = None
    metrics: PostMetrics = Field(default_factory=PostMetrics)
    error_message: str | None = None
    retry_count: int = 0

    def can_retry(self) -> bool:
        return self.status == PostStatus.FAILED and self.retry_count < MAX_RETRY_ATTEMPTS
