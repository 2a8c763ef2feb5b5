from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.api.base import ApiModel
from app.models.domain.recruiter_domain import SearchCriteria


class RecruiterCreate(ApiModel):
    name: str
    company: str
    location: str = ""
    industry: str | None = None
    linkedin_profile_url: str
    notes: str = ""
    search_criteria: SearchCriteria | None = None


class RecruiterPatch(ApiModel):
    """Mutable fields. Status is changed only through the status endpoint."""

    nullable_fields = frozenset({"industry", "search_criteria"})

    name: str | None = None
    company: str | None = None
    location: str | None = None
    industry: str | None = None
    notes: str | None = None
    search_criteria: SearchCriteria | None = None


class StatusUpdate(ApiModel):
    status: str
    notes: str | None = None


class GenerateMessagesRequest(ApiModel):
    language: Literal["en", "pt"] = "en"


class SearchUrl(BaseModel):
    description: str
    url: str


class SearchUrlsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    search_urls: list[SearchUrl]
