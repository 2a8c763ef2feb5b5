from app.models.api.base import ApiModel
from app.models.domain.opportunity_domain import RemoteType, Salary


class OpportunityCreate(ApiModel):
    company: str
    position: str
    description: str = ""
    contact_email: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    recruiter_id: str | None = None
    job_posting_url: str | None = None
    company_website: str | None = None
    notes: str = ""
    salary: Salary | None = None
    location: str | None = None
    remote_type: RemoteType | None = None


class OpportunityPatch(ApiModel):
    """Mutable fields. The stage is changed only through the stage endpoint."""

    nullable_fields = frozenset(
        {
            "contact_email",
            "contact_name",
            "contact_phone",
            "job_posting_url",
            "company_website",
            "salary",
            "location",
            "remote_type",
        }
    )

    company: str | None = None
    position: str | None = None
    description: str | None = None
    contact_email: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    job_posting_url: str | None = None
    company_website: str | None = None
    notes: str | None = None
    salary: Salary | None = None
    location: str | None = None
    remote_type: RemoteType | None = None


class StageUpdate(ApiModel):
    stage: str
    notes: str | None = None
