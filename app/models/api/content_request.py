# app/models/api/content_request.py
from datetime import datetime

from pydantic import Field

from app.models.api.base import ApiModel
from app.models.domain.content_domain import PostIdeaStatus


class PostIdeaCreate(ApiModel):
    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)


class PostIdeaPatch(ApiModel):
    """Mutable post idea fields. ``used`` is normally set by post creation."""

    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    status: PostIdeaStatus | None = None


class PostCreate(ApiModel):
    content: str
    post_idea_id: str | None = None
    scheduled_at: datetime | None = None


class PostPatch(ApiModel):
    """Only the content is freely editable; status moves through its own transitions."""

    content: str | None = None


class ScheduleRequest(ApiModel):
    scheduled_at: datetime


class GeneratePostRequest(ApiModel):
    post_idea_id: str
    tone: str = "professional"
    max_words: int = Field(default=300, ge=50, le=1000)


class GenerateBulkRequest(ApiModel):
    count: int = Field(default=5, ge=1, le=10)
    topic: str | None = None


class GenerateIdeasRequest(ApiModel):
    count: int = Field(default=5, ge=1, le=10)


class MetricsUpdate(ApiModel):
    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    shares: int = Field(default=0, ge=0)

