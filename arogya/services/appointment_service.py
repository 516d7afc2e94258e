from datetime import date
from typing import List, Optional
import logging

from sqlalchemy.orm import joinedload

from ..core.errors import RecordNotFoundError, InvalidTransitionError
from ..models.appointment import AppointmentStatus
from ..models.doctor import Doctor
from ..models.patient_profile import PatientAppointment, PatientProfile
from ..schemas.appointment import (
    BookingCreate, ConsultationUpdate, ConsultationResponse, ConsultationListResponse,
    DoctorSummary, MedicalRecordsResponse, PatientAppointmentResponse,
    PatientAppointmentsResponse, PatientDashboardResponse, PatientDashboardStats
)
from .base import ScopedService
from .scheduling import (
    BOOKING_TRANSITIONS, can_transition, slot_end_time, format_time, is_upcoming, is_past
)

logger = logging.getLogger(__name__)


def to_response(appointment: PatientAppointment) -> PatientAppointmentResponse:
    doctor = appointment.doctor
    return PatientAppointmentResponse(
        id=appointment.id,
        appointment_date=appointment.appointment_date,
        start_time=format_time(appointment.start_time),
        end_time=format_time(appointment.end_time),
        status=appointment.status,
        symptoms=appointment.symptoms,
        diagnosis=appointment.diagnosis,
        prescription=appointment.prescription,
        notes=appointment.notes,
        doctor=_doctor_summary(doctor) if doctor else None,
    )


def _doctor_summary(doctor: Doctor) -> DoctorSummary:
    return DoctorSummary(
        id=doctor.id,
        full_name=doctor.full_name,
        specialization=doctor.specialization,
        consultation_fee=float(doctor.consultation_fee) if doctor.consultation_fee is not None else None,
    )


class PatientAppointmentService(ScopedService):
    """A patient's bookings with doctors."""

    def list_appointments(self, newest_first: bool = False) -> List[PatientAppointment]:
        order = PatientAppointment.appointment_date
        with self.operation("Failed to load appointments"):
            return self.db.query(PatientAppointment).options(
                joinedload(PatientAppointment.doctor)
            ).filter(
                PatientAppointment.patient_id == self.identity.id
            ).order_by(order.desc() if newest_first else order.asc()).all()

    def verified_doctors(self) -> List[Doctor]:
        with self.operation("Failed to load doctors"):
            return self.db.query(Doctor).filter(
                Doctor.verified.is_(True)
            ).order_by(Doctor.full_name).all()

    def view(self, today: Optional[date] = None, message: Optional[str] = None) -> PatientAppointmentsResponse:
        today = today or date.today()
        appointments = self.list_appointments()
        return PatientAppointmentsResponse(
            upcoming=[to_response(a) for a in appointments if is_upcoming(a, today)],
            past=[to_response(a) for a in appointments if is_past(a, today)],
            doctors=[_doctor_summary(d) for d in self.verified_doctors()],
            message=message,
        )

    def book(self, form: BookingCreate) -> PatientAppointment:
        with self.operation("Failed to book appointment"):
            doctor = self.db.query(Doctor).filter(
                Doctor.id == form.doctor_id,
                Doctor.verified.is_(True)
            ).first()
        if not doctor:
            raise RecordNotFoundError("Doctor not found")

        # No check against the doctor's other bookings at this time.
        appointment = PatientAppointment(
            patient_id=self.identity.id,
            doctor_id=doctor.id,
            appointment_date=form.appointment_date,
            start_time=form.start_time,
            end_time=slot_end_time(form.start_time),
            symptoms=form.symptoms,
            status=AppointmentStatus.PENDING.value,
        )
        with self.operation("Failed to book appointment"):
            self.db.add(appointment)
            self.db.commit()

        logger.info(f"Patient {self.identity.id} booked {appointment.id} with doctor {doctor.id}")
        return appointment

    def cancel(self, appointment_id: str) -> PatientAppointment:
        with self.operation("Failed to load appointment"):
            appointment = self.db.query(PatientAppointment).filter(
                PatientAppointment.id == appointment_id,
                PatientAppointment.patient_id == self.identity.id
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

    def dashboard(self, today: Optional[date] = None) -> PatientDashboardResponse:
        today = today or date.today()
        appointments = self.list_appointments()
        return PatientDashboardResponse(
            stats=PatientDashboardStats(
                upcoming_appointments=sum(1 for a in appointments if is_upcoming(a, today)),
                total_appointments=len(appointments),
                medical_records=sum(1 for a in appointments if a.diagnosis or a.prescription),
            ),
            recent_appointments=[to_response(a) for a in appointments[:3]],
        )

    def medical_records(self) -> MedicalRecordsResponse:
        with self.operation("Failed to load medical records"):
            profile = self.db.query(PatientProfile).filter(
                PatientProfile.id == self.identity.id
            ).first()
            documented = self.db.query(PatientAppointment).options(
                joinedload(PatientAppointment.doctor)
            ).filter(
                PatientAppointment.patient_id == self.identity.id,
                PatientAppointment.diagnosis.isnot(None)
            ).order_by(PatientAppointment.appointment_date.desc()).all()

        return MedicalRecordsResponse(
            current_medications=list(profile.current_medications or []) if profile else [],
            medical_history=list(profile.medical_history or []) if profile else [],
            allergies=list(profile.allergies or []) if profile else [],
            records=[to_response(a) for a in documented],
        )


class ConsultationService(ScopedService):
    """The doctor's side of patient bookings."""

    def list_consultations(self, status: Optional[AppointmentStatus] = None) -> List[PatientAppointment]:
        with self.operation("Failed to load consultations"):
            query = self.db.query(PatientAppointment).options(
                joinedload(PatientAppointment.patient)
            ).filter(PatientAppointment.doctor_id == self.identity.id)
            if status is not None:
                query = query.filter(PatientAppointment.status == status.value)
            return query.order_by(
                PatientAppointment.appointment_date, PatientAppointment.start_time
            ).all()

    def view(self, status: Optional[AppointmentStatus] = None, message: Optional[str] = None) -> ConsultationListResponse:
        return ConsultationListResponse(
            consultations=[self._to_response(a) for a in self.list_consultations(status)],
            message=message,
        )

    def update(self, appointment_id: str, form: ConsultationUpdate) -> PatientAppointment:
        with self.operation("Failed to load consultation"):
            appointment = self.db.query(PatientAppointment).filter(
                PatientAppointment.id == appointment_id,
                PatientAppointment.doctor_id == self.identity.id
            ).first()
        if not appointment:
            raise RecordNotFoundError("Appointment not found")

        changes = form.model_dump(exclude_unset=True)
        target = changes.pop("status", None)
        if target is not None and target.value != appointment.status:
            if not can_transition(BOOKING_TRANSITIONS, appointment.status, target.value):
                raise InvalidTransitionError(appointment.status, target.value)

        with self.operation("Failed to update consultation"):
            if target is not None:
                appointment.status = target.value
            for field, value in changes.items():
                setattr(appointment, field, value)
            self.db.commit()

        logger.info(f"Doctor {self.identity.id} updated consultation {appointment.id}")
        return appointment

    @staticmethod
    def _to_response(appointment: PatientAppointment) -> ConsultationResponse:
        patient = appointment.patient
        return ConsultationResponse(
            id=appointment.id,
            patient_id=appointment.patient_id,
            patient_name=patient.full_name if patient else None,
            appointment_date=appointment.appointment_date,
            start_time=format_time(appointment.start_time),
            end_time=format_time(appointment.end_time),
            status=appointment.status,
            symptoms=appointment.symptoms,
            diagnosis=appointment.diagnosis,
            prescription=appointment.prescription,
            notes=appointment.notes,
        )
