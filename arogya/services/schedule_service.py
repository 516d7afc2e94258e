from datetime import date, timedelta
from typing import List, Optional
import logging

from ..core.errors import RecordNotFoundError, InvalidTransitionError
from ..models.appointment import Appointment, AppointmentStatus
from ..models.patient import Patient
from ..schemas.appointment import (
    SlotCreate, SlotStatusUpdate, SlotReschedule, ScheduleEntry, ScheduleResponse
)
from .base import ScopedService
from .scheduling import (
    SCHEDULE_TRANSITIONS, can_transition, slot_end_time, format_time,
    schedule_action, long_date
)

logger = logging.getLogger(__name__)


class ScheduleService(ScopedService):
    """A doctor's day-by-day schedule.

    No overlap check is made when slots are added or moved; two rows may
    cover the same time.
    """

    def day(self, day: date) -> List[Appointment]:
        with self.operation("Failed to load schedule"):
            return self.db.query(Appointment).filter(
                Appointment.doctor_id == self.identity.id,
                Appointment.appointment_date == day
            ).order_by(Appointment.start_time).all()

    def view(self, day: Optional[date] = None, message: Optional[str] = None) -> ScheduleResponse:
        day = day or date.today()
        return ScheduleResponse(
            date=day,
            label=long_date(day),
            previous_date=day - timedelta(days=1),
            next_date=day + timedelta(days=1),
            appointments=[self._to_entry(a) for a in self.day(day)],
            message=message,
        )

    def add_slot(self, form: SlotCreate) -> Appointment:
        patient_name = form.patient_name
        if form.patient_id:
            patient = self._own_patient(form.patient_id)
            patient_name = patient_name or patient.full_name

        slot = Appointment(
            doctor_id=self.identity.id,
            patient_id=form.patient_id,
            patient_name=patient_name,
            appointment_date=form.appointment_date,
            start_time=form.start_time,
            end_time=slot_end_time(form.start_time),
            status=form.status,
            notes=form.notes,
        )
        with self.operation("Failed to add time slot"):
            self.db.add(slot)
            self.db.commit()

        logger.info(f"Doctor {self.identity.id} added {slot.status} slot {slot.id}")
        return slot

    def change_status(self, slot_id: str, form: SlotStatusUpdate) -> Appointment:
        slot = self._get(slot_id)
        if not can_transition(SCHEDULE_TRANSITIONS, slot.status, form.status.value):
            raise InvalidTransitionError(slot.status, form.status.value)

        patient_name = form.patient_name
        if form.status is AppointmentStatus.BOOKED and form.patient_id:
            patient_name = patient_name or self._own_patient(form.patient_id).full_name

        with self.operation("Failed to update time slot"):
            slot.status = form.status.value
            if form.status is AppointmentStatus.AVAILABLE:
                slot.patient_id = None
                slot.patient_name = None
            elif form.status is AppointmentStatus.BOOKED:
                slot.patient_id = form.patient_id
                slot.patient_name = patient_name
            self.db.commit()
        return slot

    def reschedule(self, slot_id: str, form: SlotReschedule) -> Appointment:
        slot = self._get(slot_id)
        # Only booked rows can be moved
        if slot.status != AppointmentStatus.BOOKED.value:
            raise InvalidTransitionError(
                slot.status, AppointmentStatus.BOOKED.value,
                detail=f"Cannot reschedule a '{slot.status}' slot",
            )

        with self.operation("Failed to reschedule appointment"):
            slot.appointment_date = form.appointment_date
            slot.start_time = form.start_time
            slot.end_time = slot_end_time(form.start_time)
            self.db.commit()
        return slot

    def _get(self, slot_id: str) -> Appointment:
        with self.operation("Failed to load time slot"):
            slot = self.db.query(Appointment).filter(
                Appointment.id == slot_id,
                Appointment.doctor_id == self.identity.id
            ).first()
        if not slot:
            raise RecordNotFoundError("Appointment not found")
        return slot

    def _own_patient(self, patient_id: str) -> Patient:
        with self.operation("Failed to load patient record"):
            patient = self.db.query(Patient).filter(
                Patient.id == patient_id,
                Patient.doctor_id == self.identity.id
            ).first()
        if not patient:
            raise RecordNotFoundError("Patient not found")
        return patient

    @staticmethod
    def _to_entry(slot: Appointment) -> ScheduleEntry:
        return ScheduleEntry(
            id=slot.id,
            start_time=format_time(slot.start_time),
            end_time=format_time(slot.end_time),
            status=slot.status,
            patient_id=slot.patient_id,
            patient_name=slot.patient_name,
            notes=slot.notes,
            action=schedule_action(slot.status),
        )
