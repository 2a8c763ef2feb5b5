from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.domain.user_domain import UserProfile


class _CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthResponse(_CamelResponse):
    """Response for register and login."""

    user: UserProfile
    access_token: str
    refresh_token: str


class RefreshResponse(_CamelResponse):
    access_token: str
