from enum import StrEnum
from typing import Literal

from pydantic import Field

from app.models.domain.base import DomainModel, ObjectIdStr, OwnedDocument, UTCDateTime


class JobStage(StrEnum):
    INITIAL_CONTACTS = "initial_contacts"
    IN_PROGRESS = "in_progress"
    INTERVIEW = "interview"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    DEAL_CLOSED = "deal_closed"
    ARCHIVED = "archived"


PIPELINE = [
    JobStage.INITIAL_CONTACTS,
    JobStage.IN_PROGRESS,
    JobStage.INTERVIEW,
    JobStage.PROPOSAL,
    JobStage.NEGOTIATION,
    JobStage.DEAL_CLOSED,
]


def _build_transition_table() -> dict[JobStage, frozenset[JobStage]]:
    table: dict[JobStage, frozenset[JobStage]] = {}
    for index, stage in enumerate(PIPELINE):
        neighbours = {JobStage.ARCHIVED}
        if index > 0:
            neighbours.add(PIPELINE[index - 1])
        if index + 1 < len(PIPELINE):
            neighbours.add(PIPELINE[index + 1])
        table[stage] = frozenset(neighbours)
    # archived is not terminal: an opportunity can be revived where it left off
    table[JobStage.ARCHIVED] = frozenset(PIPELINE)
    return table


STAGE_TRANSITIONS = _build_transition_table()


def is_regular_transition(current: JobStage, target: JobStage) -> bool:
    """True when ``target`` is one step away in the pipeline (or archive/revive)."""
    return current == target or target in STAGE_TRANSITIONS[current]


RemoteType = Literal["remote", "hybrid", "onsite"]


class StageHistoryEntry(DomainModel):
    stage: JobStage
    timestamp: UTCDateTime
    notes: str | None = None
    forced: bool = False


class Salary(DomainModel):
    min: float
    max: float
    currency: str = "USD"


class Attachment(DomainModel):
    filename: str
    url: str
    uploaded_at: UTCDateTime


class JobOpportunity(OwnedDocument):
    company: str
    position: str
    description: str = ""
    stage: JobStage
    stage_history: list[StageHistoryEntry] = Field(default_factory=list)
    contact_email: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    recruiter_id: ObjectIdStr | None = None
    job_posting_url: str | None = None
    company_website: str | None = None
    notes: str = ""
    attachments: list[Attachment] = Field(default_factory=list)
    salary: Salary | None = None
    location: str | None = None
    remote_type: RemoteType | None = None
