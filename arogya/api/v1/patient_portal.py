from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_patient
from ...core.database import get_db
from ...core.security import Identity
from ...schemas.appointment import (
    BookingCreate, MedicalRecordsResponse, PatientAppointmentsResponse, PatientDashboardResponse
)
from ...schemas.profile import PatientProfileResponse, PatientProfileUpdate
from ...services.appointment_service import PatientAppointmentService
from ...services.profile_service import PatientProfileService

router = APIRouter(tags=["Patient Portal"])


@router.get("/patient-dashboard", response_model=PatientDashboardResponse)
async def patient_dashboard(
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Appointment counts and the first three appointments."""
    return PatientAppointmentService(db, identity).dashboard()


@router.get("/patient-appointments", response_model=PatientAppointmentsResponse)
async def patient_appointments(
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Upcoming and past bookings plus the doctors open for booking."""
    return PatientAppointmentService(db, identity).view()


@router.post("/patient-appointments", response_model=PatientAppointmentsResponse, status_code=201)
async def book_appointment(
    form: BookingCreate,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Book a pending appointment with a verified doctor."""
    service = PatientAppointmentService(db, identity)
    service.book(form)
    return service.view(message="Appointment booked successfully")


@router.post("/patient-appointments/{appointment_id}/cancel", response_model=PatientAppointmentsResponse)
async def cancel_appointment(
    appointment_id: str,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Cancel one of the patient's appointments."""
    service = PatientAppointmentService(db, identity)
    service.cancel(appointment_id)
    return service.view(message="Appointment cancelled")


@router.get("/patient-records", response_model=MedicalRecordsResponse)
async def patient_records(
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Medications, history, allergies and diagnosed appointments."""
    return PatientAppointmentService(db, identity).medical_records()


@router.get("/patient-profile", response_model=PatientProfileResponse)
async def patient_profile(
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Get the patient's profile."""
    return PatientProfileService(db, identity).view()


@router.patch("/patient-profile", response_model=PatientProfileResponse)
async def update_patient_profile(
    form: PatientProfileUpdate,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Edit the patient's profile."""
    service = PatientProfileService(db, identity)
    service.update(form)
    return service.view(message="Profile updated successfully")
