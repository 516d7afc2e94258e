from typing import List, Optional
import logging

from sqlalchemy.orm import joinedload

from ..core.errors import RecordNotFoundError, InvalidTransitionError
from ..models.appointment import AppointmentStatus
from ..models.veterinary import AnimalHealthRecord, VetAppointment, VeterinaryDoctor
from ..schemas.veterinary import (
    AnimalOption, AnimalRecordForm, AnimalRecordResponse, AnimalRecordsResponse,
    VetAppointmentResponse, VetBookingCreate, VetDoctorResponse, VetSlot,
    VeterinaryAppointmentsResponse
)
from .base import ScopedService
from .scheduling import BOOKING_TRANSITIONS, can_transition, format_time

logger = logging.getLogger(__name__)


class AnimalRecordService(ScopedService):
    """Health records for the animals a patient owns."""

    def list_animals(self) -> List[AnimalHealthRecord]:
        with self.operation("Failed to load animal records"):
            return self.db.query(AnimalHealthRecord).filter(
                AnimalHealthRecord.patient_id == self.identity.id
            ).order_by(AnimalHealthRecord.created_at.desc()).all()

    def view(self, message: Optional[str] = None) -> AnimalRecordsResponse:
        return AnimalRecordsResponse(
            animals=[AnimalRecordResponse.model_validate(a) for a in self.list_animals()],
            message=message,
        )

    def add(self, form: AnimalRecordForm) -> AnimalHealthRecord:
        animal = AnimalHealthRecord(patient_id=self.identity.id, **form.model_dump())
        with self.operation("Failed to add animal record"):
            self.db.add(animal)
            self.db.commit()
        logger.info(f"Patient {self.identity.id} added animal {animal.id}")
        return animal

    def update(self, record_id: str, form: AnimalRecordForm) -> AnimalHealthRecord:
        animal = self.get(record_id)
        with self.operation("Failed to update animal record"):
            for field, value in form.model_dump().items():
                setattr(animal, field, value)
            self.db.commit()
        return animal

    def delete(self, record_id: str) -> None:
        animal = self.get(record_id)
        with self.operation("Failed to delete animal record"):
            self.db.delete(animal)
            self.db.commit()
        logger.info(f"Patient {self.identity.id} deleted animal {record_id}")

    def get(self, record_id: str) -> AnimalHealthRecord:
        with self.operation("Failed to load animal record"):
            animal = self.db.query(AnimalHealthRecord).filter(
                AnimalHealthRecord.id == record_id,
                AnimalHealthRecord.patient_id == self.identity.id
            ).first()
        if not animal:
            raise RecordNotFoundError("Animal record not found")
        return animal


class VetAppointmentService(ScopedService):

    def verified_vets(self) -> List[VeterinaryDoctor]:
        with self.operation("Failed to load veterinary doctors"):
            return self.db.query(VeterinaryDoctor).filter(
                VeterinaryDoctor.verified.is_(True)
            ).order_by(VeterinaryDoctor.full_name).all()

    def list_appointments(self) -> List[VetAppointment]:
        with self.operation("Failed to load appointments"):
            return self.db.query(VetAppointment).options(
                joinedload(VetAppointment.vet),
                joinedload(VetAppointment.animal),
            ).filter(
                VetAppointment.patient_id == self.identity.id
            ).order_by(VetAppointment.appointment_date.desc()).all()

    def view(self, message: Optional[str] = None) -> VeterinaryAppointmentsResponse:
        animals = AnimalRecordService(self.db, self.identity).list_animals()
        return VeterinaryAppointmentsResponse(
            vets=[self._vet_response(v) for v in self.verified_vets()],
            animals=[AnimalOption.model_validate(a) for a in animals],
            appointments=[self._to_response(a) for a in self.list_appointments()],
            message=message,
        )

    def book(self, form: VetBookingCreate) -> VetAppointment:
        with self.operation("Failed to book appointment"):
            vet = self.db.query(VeterinaryDoctor).filter(
                VeterinaryDoctor.id == form.vet_id,
                VeterinaryDoctor.verified.is_(True)
            ).first()
        if not vet:
            raise RecordNotFoundError("Veterinary doctor not found")
        animal = AnimalRecordService(self.db, self.identity).get(form.animal_id)

        appointment = VetAppointment(
            patient_id=self.identity.id,
            vet_id=vet.id,
            animal_id=animal.id,
            appointment_date=form.appointment_date,
            appointment_time=format_time(form.appointment_time),
            notes=form.notes,
            status=AppointmentStatus.PENDING.value,
        )
        with self.operation("Failed to book appointment"):
            self.db.add(appointment)
            self.db.commit()
        logger.info(f"Patient {self.identity.id} booked vet appointment {appointment.id}")
        return appointment

    def cancel(self, appointment_id: str) -> VetAppointment:
        with self.operation("Failed to load appointment"):
            appointment = self.db.query(VetAppointment).filter(
                VetAppointment.id == appointment_id,
                VetAppointment.patient_id == self.identity.id
            ).first()
        if not appointment:
            raise RecordNotFoundError("Appointment not found")

        target = AppointmentStatus.CANCELLED.value
        if not can_transition(BOOKING_TRANSITIONS, appointment.status, target):
            raise InvalidTransitionError(appointment.status, target)

        with self.operation("Failed to cancel appointment"):
            appointment.status = target
            self.db.commit()
        return appointment

    @staticmethod
    def _vet_response(vet: VeterinaryDoctor) -> VetDoctorResponse:
        slots = vet.available_slots if isinstance(vet.available_slots, list) else []
        return VetDoctorResponse(
            id=vet.id,
            full_name=vet.full_name,
            specialization=vet.specialization,
            phone=vet.phone,
            next_slots=[
                VetSlot(date=s.get("date"), time=s.get("time"))
                for s in slots[:2] if isinstance(s, dict)
            ],
        )

    @staticmethod
    def _to_response(appointment: VetAppointment) -> VetAppointmentResponse:
        vet, animal = appointment.vet, appointment.animal
        return VetAppointmentResponse(
            id=appointment.id,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            status=appointment.status,
            notes=appointment.notes,
            diagnosis=appointment.diagnosis,
            treatment_plan=appointment.treatment_plan,
            vet_name=vet.full_name if vet else None,
            vet_specialization=vet.specialization if vet else None,
            animal_tag=animal.animal_id if animal else None,
            animal_species=animal.species if animal else None,
        )
