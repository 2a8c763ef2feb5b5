from enum import StrEnum

from pydantic import Field

from app.models.domain.base import DomainModel, OwnedDocument, UTCDateTime


class RecruiterStatus(StrEnum):
    DISCOVERED = "discovered"
    CONNECTION_SENT = "connection_sent"
    CONNECTED = "connected"
    REJECTED = "rejected"


class GeneratedMessage(DomainModel):
    message: str
    generated_at: UTCDateTime
    used: bool = False


class SearchCriteria(DomainModel):
    region: list[str] = Field(default_factory=list)
    industry: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class Recruiter(OwnedDocument):
    name: str
    company: str
    location: str = ""
    industry: str | None = None
    linkedin_profile_url: str
    status: RecruiterStatus = RecruiterStatus.DISCOVERED
    discovered_at: UTCDateTime
    connection_sent_at: UTCDateTime | None = None
    connected_at: UTCDateTime | None = None
    rejected_at: UTCDateTime | None = None
    # Monday of the week the request was sent; pinned, never recomputed
    connection_week: UTCDateTime | None = None
    generated_messages: list[GeneratedMessage] = Field(default_factory=list)
    notes: str = ""
    search_criteria: SearchCriteria | None = None
