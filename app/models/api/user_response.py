# app/models/api/user_response.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuotaUsage(_CamelResponse):
    used: int
    limit: int | None = None


class WeeklyQuotaResponse(_CamelResponse):
    """Response for GET /users/me/quota"""

    week_start: datetime
    week_end: datetime
    connections: QuotaUsage
    posts: QuotaUsage


class LinkedInAuthUrlResponse(_CamelResponse):
    auth_url: str


class LinkedInCallbackResponse(_CamelResponse):
    success: bool
    linkedin_id: str | None = None
    profile_url: str | None = None


class MessageResponse(BaseModel):
    message: str
