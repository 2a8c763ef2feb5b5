# app/services/recruiter_service.py
"""
Recruiter outreach: CRUD, status changes and the weekly connection quota.

``connectionWeek`` is pinned to the Monday of the week in which the
connection request was sent and never recomputed, so the weekly count is an
equality match on that week and not a created-since window.
"""

from __future__ import annotations

from datetime import datetime
from urllib.parse import urlencode

from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from app.infrastructure.observability.logging import get_logger
from app.models.api.recruiter_request import RecruiterCreate, RecruiterPatch, SearchUrl
from app.models.domain.recruiter_domain import GeneratedMessage, Recruiter, RecruiterStatus
from app.repositories.base import utcnow
from app.repositories.recruiter_repository import DUPLICATE_PROFILE_MESSAGE, RecruiterRepository
from app.repositories.user_repository import UserRepository
from app.services.content_generation_service import ContentGenerationService
from app.utils.errors import ConflictError, ValidationError
from app.utils.time_windows import start_of_week
from app.utils.validation import is_valid_url, validate_enum, validate_string_length

logger = get_logger(__name__)

LINKEDIN_PEOPLE_SEARCH_URL = "https://www.linkedin.com/search/results/people/"


def _validate_fields(fields: dict) -> None:
    if "name" in fields:
        validate_string_length("Name", fields["name"], min_length=1, max_length=200)
    if "company" in fields:
        validate_string_length("Company", fields["company"], min_length=1, max_length=200)


def linkedin_search_url(
    title: str | None = None,
    keywords: list[str] | None = None,
    location: str | None = None,
    company: str | None = None,
) -> str:
    terms = ([title] if title else []) + list(keywords or [])
    params = []
    if terms:
        params.append(("keywords", " ".join(terms)))
    if location:
        params.append(("geoUrn", location))
    if company:
        params.append(("company", company))
    params.append(("origin", "GLOBAL_SEARCH_HEADER"))
    return f"{LINKEDIN_PEOPLE_SEARCH_URL}?{urlencode(params)}"


def build_search_urls(
    skills: list[str], location: str | None = None, companies: list[str] | None = None
) -> list[SearchUrl]:
    searches = [
        SearchUrl(
            description="Technical Recruiters - LATAM",
            url=linkedin_search_url(
                "Technical Recruiter", ["LATAM", "Latin America", *skills[:1]], location
            ),
        ),
        SearchUrl(
            description="Global Remote Talent Acquisition",
            url=linkedin_search_url(
                "Talent Acquisition", ["remote", "global", "worldwide", "international"], location
            ),
        ),
        SearchUrl(
            description="Engineering Recruiters - LATAM Focus",
            url=linkedin_search_url(
                "Engineering Recruiter", ["Latin America", "Brazil", "Argentina", "remote"], location
            ),
        ),
        SearchUrl(
            description="Global Hiring - Remote Positions",
            url=linkedin_search_url(
                "Recruiter", ["global hiring", "remote first", "distributed team"], location
            ),
        ),
    ]
    for company in companies or []:
        searches.append(
            SearchUrl(
                description=f"Recruiters at {company} - Global Roles",
                url=linkedin_search_url("Recruiter", ["global", "remote"], location, company),
            )
        )
    return searches


class RecruiterService:
    def __init__(self, db: AsyncDatabase, content: ContentGenerationService | None = None):
        self.recruiters = RecruiterRepository(db)
        self.users = UserRepository(db)
        self.content = content or ContentGenerationService(db)

    async def create(self, user_id: str, data: RecruiterCreate) -> Recruiter:
        fields = data.model_dump()
        _validate_fields(fields)
        if not is_valid_url(data.linkedin_profile_url):
            raise ValidationError("Invalid LinkedIn profile URL")

        if await self.recruiters.exists_with_profile_url(user_id, data.linkedin_profile_url):
            raise ConflictError(DUPLICATE_PROFILE_MESSAGE)

        recruiter = await self.recruiters.insert(
            user_id,
            {
                **fields,
                "status": RecruiterStatus.DISCOVERED,
                "discovered_at": utcnow(),
                "generated_messages": [],
            },
        )
        logger.info("Recruiter created", user_id=user_id, recruiter_id=recruiter.id)
        return recruiter

    async def list(self, user_id: str, status: str | None = None) -> list[Recruiter]:
        filters = {}
        if status:
            filters["status"] = validate_enum("status", status, RecruiterStatus).value
        return await self.recruiters.list_owned(
            user_id, filters, sort=[("discoveredAt", DESCENDING)]
        )

    async def get(self, user_id: str, recruiter_id: str) -> Recruiter:
        return await self.recruiters.find_owned(user_id, recruiter_id)

    async def update(self, user_id: str, recruiter_id: str, patch: RecruiterPatch) -> Recruiter:
        fields = patch.changes()
        _validate_fields(fields)
        return await self.recruiters.update_owned(user_id, recruiter_id, fields)

    async def update_status(
        self,
        user_id: str,
        recruiter_id: str,
        status: str,
        notes: str | None = None,
        timezone: str | None = None,
        now: datetime | None = None,
    ) -> Recruiter:
        """
        Change status and stamp the matching timestamp. Moving to connection_sent
        pins ``connectionWeek`` to the Monday of the current week in ``timezone``.
        """
        new_status = validate_enum("status", status, RecruiterStatus)
        now = now or utcnow()

        fields: dict = {"status": new_status}
        if notes is not None:
            fields["notes"] = notes

        if new_status == RecruiterStatus.CONNECTION_SENT:
            fields["connection_sent_at"] = now
            fields["connection_week"] = start_of_week(now, timezone)
        elif new_status == RecruiterStatus.CONNECTED:
            fields["connected_at"] = now
        elif new_status == RecruiterStatus.REJECTED:
            fields["rejected_at"] = now

        recruiter = await self.recruiters.update_owned(user_id, recruiter_id, fields)
        logger.info(
            "Recruiter status updated",
            user_id=user_id,
            recruiter_id=recruiter_id,
            status=new_status.value,
        )
        return recruiter

    async def delete(self, user_id: str, recruiter_id: str) -> None:
        await self.recruiters.delete_owned(user_id, recruiter_id)
        logger.info("Recruiter deleted", user_id=user_id, recruiter_id=recruiter_id)

    async def get_weekly_connection_count(
        self, user_id: str, timezone: str | None = None, now: datetime | None = None
    ) -> int:
        """Connections whose pinned week is the week containing ``now``."""
        week_start = start_of_week(now, timezone)
        return await self.recruiters.count_connections_in_week(user_id, week_start)

    async def generate_messages(
        self, user_id: str, recruiter_id: str, language: str = "en"
    ) -> Recruiter:
        """Replace the recruiter's generated messages with a fresh set of three."""
        user = await self.users.find_by_id(user_id)
        recruiter = await self.recruiters.find_owned(user_id, recruiter_id)

        texts = await self.content.recruiter_messages(user, recruiter, language)
        generated_at = utcnow()
        messages = [
            GeneratedMessage(message=text, generated_at=generated_at, used=False) for text in texts
        ]

        recruiter = await self.recruiters.update_owned(
            user_id, recruiter_id, {"generated_messages": messages}
        )
        logger.info(
            "Recruiter messages generated",
            user_id=user_id,
            recruiter_id=recruiter_id,
            language=language,
            count=len(messages),
        )
        return recruiter

    async def search_urls(self, user_id: str, companies: list[str] | None = None) -> list[SearchUrl]:
        user = await self.users.find_by_id(user_id)
        skills = user.skills or ["Software Engineering"]
        location = user.target_regions[0] if user.target_regions else None
        return build_search_urls(skills, location, companies)
