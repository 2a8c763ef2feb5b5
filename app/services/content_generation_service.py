# app/services/content_generation_service.py
"""
Orchestrates generated content: gathers the inputs (user skills, post idea,
recruiter), calls the text-generation provider when one is configured and
falls back to deterministic templates when none is.

Provider failures are not masked by the fallback; they surface as
ExternalServiceError with a reason the caller can act on.
"""

import random
from typing import Literal

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from app.infrastructure.observability.logging import get_logger
from app.models.api.content_request import PostCreate
from app.models.api.content_response import (
    BulkGenerationResponse,
    GeneratedContentResponse,
    GeneratedIdeasResponse,
    PostIdeaSuggestion,
)
from app.models.domain.recruiter_domain import Recruiter
from app.models.domain.user_domain import UserRecord
from app.repositories.post_idea_repository import PostIdeaRepository
from app.repositories.user_repository import UserRepository
from app.services import content_templates
from app.services.openai_service import OpenAIService
from app.services.post_service import PostService
from app.utils.errors import AppError

logger = get_logger(__name__)

Source = Literal["ai", "template"]


class ContentGenerationService:
    def __init__(
        self,
        db: AsyncDatabase,
        generator: OpenAIService | None = None,
        rng: random.Random | None = None,
    ):
        self.users = UserRepository(db)
        self.ideas = PostIdeaRepository(db)
        self.posts = PostService(db)
        self.generator = generator or OpenAIService()
        self.rng = rng or random.Random()

    @property
    def source(self) -> Source:
        return "ai" if self.generator.is_configured else "template"

    async def generate_post(
        self, user_id: str, post_idea_id: str, tone: str = "professional", max_words: int = 300
    ) -> GeneratedContentResponse:
        user = await self.users.find_by_id(user_id)
        idea = await self.ideas.find_owned(user_id, post_idea_id)

        if not self.generator.is_configured:
            content = content_templates.generate_post_content(idea.title, user.skills, self.rng)
            return GeneratedContentResponse(content=content, source="template")

        content = await self.generator.generate_linkedin_post(
            idea.title, idea.description, user.skills, tone, max_words
        )
        logger.info("Post content generated", user_id=user_id, post_idea_id=post_idea_id)
        return GeneratedContentResponse(content=content, source="ai")

    async def generate_ideas(self, user_id: str, count: int = 5) -> GeneratedIdeasResponse:
        user = await self.users.find_by_id(user_id)

        if not self.generator.is_configured:
            ideas = content_templates.FALLBACK_POST_IDEAS[:count]
        else:
            ideas = await self.generator.generate_post_ideas(user.skills, count)

        return GeneratedIdeasResponse(
            ideas=[PostIdeaSuggestion(**idea) for idea in ideas], source=self.source
        )

    async def generate_bulk(
        self, user_id: str, count: int = 5, topic: str | None = None
    ) -> BulkGenerationResponse:
        """Create up to ten template-based drafts; one failing draft does not abort the batch."""
        user = await self.users.find_by_id(user_id)
        skills = user.skills or content_templates.DEFAULT_SKILLS

        contents = content_templates.generate_multiple_posts(count, topic, skills, self.rng)
        created = []
        for content in contents:
            try:
                created.append(await self.posts.create(user_id, PostCreate(content=content)))
            except (AppError, PyMongoError) as e:
                logger.warning("Failed to create generated post", user_id=user_id, error=str(e))

        logger.info("Bulk posts generated", user_id=user_id, requested=count, created=len(created))
        return BulkGenerationResponse(
            message=f"Successfully generated {len(created)} posts",
            posts=created,
            count=len(created),
        )

    async def recruiter_messages(
        self, user: UserRecord, recruiter: Recruiter, language: str = "en"
    ) -> list[str]:
        if not self.generator.is_configured:
            return content_templates.recruiter_messages(
                recruiter.name, recruiter.company, user.skills, user.bio, language
            )
        return await self.generator.generate_recruiter_messages(
            recruiter.name, recruiter.company, user.skills, user.bio, language
        )
