from datetime import datetime

from app.models.api.base import ApiModel
from app.models.domain.appointment_domain import AppointmentType


class AppointmentCreate(ApiModel):
    title: str
    description: str = ""
    type: AppointmentType
    start_time: datetime
    end_time: datetime
    all_day: bool = False
    job_opportunity_id: str | None = None
    company: str | None = None
    location: str | None = None
    attendees: list[str] | None = None


class AppointmentPatch(ApiModel):
    nullable_fields = frozenset({"company", "location", "attendees"})

    title: str | None = None
    description: str | None = None
    type: AppointmentType | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    all_day: bool | None = None
    company: str | None = None
    location: str | None = None
    attendees: list[str] | None = None
