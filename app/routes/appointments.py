"""
Appointment CRUD. Lists are ordered soonest first.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.appointment_request import AppointmentCreate, AppointmentPatch
from app.models.domain.appointment_domain import Appointment
from app.services.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("", response_model=list[Appointment])
async def list_appointments(
    type_filter: str | None = Query(default=None, alias="type"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await AppointmentService(db).list(user_id, type_filter, start_date, end_date)


@router.post("", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    body: AppointmentCreate,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await AppointmentService(db).create(user_id, body)


@router.get("/{appointment_id}", response_model=Appointment)
async def get_appointment(
    appointment_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await AppointmentService(db).get(user_id, appointment_id)


@router.put("/{appointment_id}", response_model=Appointment)
async def update_appointment(
    appointment_id: str,
    body: AppointmentPatch,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await AppointmentService(db).update(user_id, appointment_id, body)


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    await AppointmentService(db).delete(user_id, appointment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
