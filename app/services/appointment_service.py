# app/services/appointment_service.py
from datetime import datetime

from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase

from app.db.helpers import to_object_id
from app.infrastructure.observability.logging import get_logger
from app.models.api.appointment_request import AppointmentCreate, AppointmentPatch
from app.models.domain.appointment_domain import Appointment, AppointmentType
from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.base import utcnow
from app.utils.time_windows import ensure_utc
from app.utils.validation import validate_enum, validate_string_length, validate_time_range

logger = get_logger(__name__)


class AppointmentService:
    def __init__(self, db: AsyncDatabase):
        self.appointments = AppointmentRepository(db)

    async def create(self, user_id: str, data: AppointmentCreate) -> Appointment:
        validate_string_length("Title", data.title, min_length=1, max_length=200)
        start_time, end_time = ensure_utc(data.start_time), ensure_utc(data.end_time)
        validate_time_range(start_time, end_time)

        fields = data.model_dump(exclude={"job_opportunity_id"})
        appointment = await self.appointments.insert(
            user_id,
            {
                **fields,
                "start_time": start_time,
                "end_time": end_time,
                "source": "manual",
                "job_opportunity_id": (
                    to_object_id(data.job_opportunity_id, "Job opportunity")
                    if data.job_opportunity_id
                    else None
                ),
                "notification_sent": False,
            },
        )
        logger.info("Appointment created", user_id=user_id, appointment_id=appointment.id)
        return appointment

    async def list(
        self,
        user_id: str,
        type: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[Appointment]:
        filters: dict = {}
        if type:
            filters["type"] = validate_enum("type", type, AppointmentType).value
        if start_date or end_date:
            window: dict = {}
            if start_date:
                window["$gte"] = ensure_utc(start_date)
            if end_date:
                window["$lte"] = ensure_utc(end_date)
            filters["startTime"] = window
        return await self.appointments.list_owned(user_id, filters, sort=[("startTime", ASCENDING)])

    async def get(self, user_id: str, appointment_id: str) -> Appointment:
        return await self.appointments.find_owned(user_id, appointment_id)

    async def update(
        self, user_id: str, appointment_id: str, patch: AppointmentPatch
    ) -> Appointment:
        fields = patch.changes()
        if "title" in fields:
            validate_string_length("Title", fields["title"], min_length=1, max_length=200)

        if "start_time" in fields or "end_time" in fields:
            # Check the range the document will have after the patch
            current = await self.appointments.find_owned(user_id, appointment_id)
            start_time = ensure_utc(fields.get("start_time") or current.start_time)
            end_time = ensure_utc(fields.get("end_time") or current.end_time)
            validate_time_range(start_time, end_time)
            fields["start_time"], fields["end_time"] = start_time, end_time

        return await self.appointments.update_owned(user_id, appointment_id, fields)

    async def delete(self, user_id: str, appointment_id: str) -> None:
        await self.appointments.delete_owned(user_id, appointment_id)
        logger.info("Appointment deleted", user_id=user_id, appointment_id=appointment_id)

    async def mark_notification_sent(self, user_id: str, appointment_id: str) -> Appointment:
        return await self.appointments.update_owned(
            user_id,
            appointment_id,
            {"notification_sent": True, "notification_sent_at": utcnow()},
        )
