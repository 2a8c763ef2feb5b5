from enum import StrEnum
from typing import Literal

from app.models.domain.base import ObjectIdStr, OwnedDocument, UTCDateTime


class AppointmentType(StrEnum):
    INTERVIEW = "interview"
    STUDY_SESSION = "study_session"


class Appointment(OwnedDocument):
    """Calendar entry. Invariant: start_time < end_time."""

    title: str
    description: str = ""
    type: AppointmentType
    start_time: UTCDateTime
    end_time: UTCDateTime
    all_day: bool = False
    source: Literal["manual", "icalendar"] = "manual"
    job_opportunity_id: ObjectIdStr | None = None
    company: str | None = None
    location: str | None = None
    attendees: list[str] | None = None
    notification_sent: bool = False
    notification_sent_at: UTCDateTime | None = None
