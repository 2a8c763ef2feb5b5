# app/services/user_service.py
"""
User settings and weekly quota usage.
"""

from datetime import datetime

from pymongo.asynchronous.database import AsyncDatabase

from app.infrastructure.observability.logging import get_logger
from app.models.api.user_request import SettingsPatch
from app.models.api.user_response import QuotaUsage, WeeklyQuotaResponse
from app.models.domain.user_domain import UserProfile
from app.repositories.user_repository import UserRepository
from app.services.post_service import PostService
from app.services.recruiter_service import RecruiterService
from app.utils.time_windows import end_of_week, start_of_week
from app.utils.validation import validate_string_length, validate_timezone

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: AsyncDatabase):
        self.users = UserRepository(db)
        self.posts = PostService(db)
        self.recruiters = RecruiterService(db)

    async def get_settings(self, user_id: str) -> UserProfile:
        user = await self.users.find_by_id(user_id)
        return user.to_profile()

    async def update_settings(self, user_id: str, patch: SettingsPatch) -> UserProfile:
        fields = patch.changes()
        if "name" in fields:
            validate_string_length("Name", fields["name"], min_length=1, max_length=200)
        if "timezone" in fields:
            validate_timezone(fields["timezone"])
        if "notifications" in fields:
            fields["notifications"] = patch.notifications

        user = await self.users.update(user_id, fields)
        logger.info("User settings updated", user_id=user_id, fields=sorted(fields))
        return user.to_profile()

    async def get_weekly_quota(
        self, user_id: str, now: datetime | None = None
    ) -> WeeklyQuotaResponse:
        """Quota usage for the week containing ``now``, in the user's own timezone."""
        user = await self.users.find_by_id(user_id)
        timezone = user.timezone or "UTC"

        connections = await self.recruiters.get_weekly_connection_count(user_id, timezone, now)
        posts = await self.posts.get_weekly_count(user_id, timezone, now)

        return WeeklyQuotaResponse(
            week_start=start_of_week(now, timezone),
            week_end=end_of_week(now, timezone),
            connections=QuotaUsage(used=connections, limit=user.weekly_connection_limit),
            posts=QuotaUsage(used=posts),
        )
