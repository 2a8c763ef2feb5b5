# app/repositories/appointment_repository.py
from app.models.domain.appointment_domain import Appointment
from app.repositories.base import OwnedRepository


class AppointmentRepository(OwnedRepository[Appointment]):
    collection_name = "appointments"
    model = Appointment
    entity_name = "Appointment"
