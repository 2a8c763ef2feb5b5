# app/repositories/recruiter_repository.py
from datetime import datetime
from typing import Any

from pymongo.errors import DuplicateKeyError

from app.models.domain.recruiter_domain import Recruiter
from app.repositories.base import OwnedRepository
from app.utils.errors import ConflictError

DUPLICATE_PROFILE_MESSAGE = "Recruiter with this LinkedIn profile already exists"


class RecruiterRepository(OwnedRepository[Recruiter]):
    collection_name = "recruiters"
    model = Recruiter
    entity_name = "Recruiter"

    async def exists_with_profile_url(self, user_id: str, profile_url: str) -> bool:
        return await self.count_owned(user_id, {"linkedinProfileUrl": profile_url}) > 0

    async def insert(self, user_id: str, fields: dict[str, Any]) -> Recruiter:
        # The unique (userId, linkedinProfileUrl) index catches concurrent inserts
        try:
            return await super().insert(user_id, fields)
        except DuplicateKeyError:
            raise ConflictError(DUPLICATE_PROFILE_MESSAGE) from None

    async def count_connections_in_week(self, user_id: str, week_start: datetime) -> int:
        return await self.count_owned(user_id, {"connectionWeek": week_start})
