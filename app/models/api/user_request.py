# app/models/api/user_request.py
from pydantic import Field

from app.models.api.base import ApiModel
from app.models.domain.user_domain import NotificationPreferences


class SettingsPatch(ApiModel):
    """Request body for PUT /users/me/settings."""

    name: str | None = None
    timezone: str | None = None
    bio: str | None = Field(default=None, max_length=2000)
    skills: list[str] | None = None
    target_industries: list[str] | None = None
    target_regions: list[str] | None = None
    weekly_connection_limit: int | None = Field(default=None, ge=1, le=1000)
    notifications: NotificationPreferences | None = None
