from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...api.deps import get_doctor
from ...core.database import get_db
from ...core.security import Identity
from ...models.appointment import AppointmentStatus
from ...schemas.appointment import (
    ConsultationListResponse, ConsultationUpdate, DashboardResponse, ScheduleResponse,
    SlotCreate, SlotReschedule, SlotStatusUpdate
)
from ...schemas.patient import PatientCreate, PatientListResponse, PatientUpdate
from ...schemas.profile import DoctorProfileResponse, DoctorProfileUpdate
from ...services.appointment_service import ConsultationService
from ...services.dashboard_service import DashboardService
from ...services.patient_service import PatientService
from ...services.profile_service import DoctorProfileService
from ...services.schedule_service import ScheduleService

router = APIRouter(tags=["Doctor"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Greeting, today's date and today's counts."""
    return DashboardService(db, identity).view()


# Patients
@router.get("/patients", response_model=PatientListResponse)
async def list_patients(
    search: str = Query("", max_length=100),
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """List the doctor's patients, optionally filtered by a search term."""
    return PatientService(db, identity).view(search)


@router.post("/patients", response_model=PatientListResponse, status_code=201)
async def create_patient(
    form: PatientCreate,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Add a patient record."""
    service = PatientService(db, identity)
    service.create_patient(form)
    return service.view(message="Patient added successfully")


@router.patch("/patients/{patient_id}", response_model=PatientListResponse)
async def update_patient(
    patient_id: str,
    form: PatientUpdate,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Edit a patient record."""
    service = PatientService(db, identity)
    service.update_patient(patient_id, form)
    return service.view(message="Patient updated successfully")


@router.delete("/patients/{patient_id}", response_model=PatientListResponse)
async def delete_patient(
    patient_id: str,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Delete a patient record."""
    service = PatientService(db, identity)
    service.delete_patient(patient_id)
    return service.view(message="Patient deleted successfully")


@router.post("/patients/{patient_id}/visits", response_model=PatientListResponse)
async def record_visit(
    patient_id: str,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Count a visit today for a patient."""
    service = PatientService(db, identity)
    service.record_visit(patient_id)
    return service.view(message="Visit recorded successfully")


# Schedule
@router.get("/schedule", response_model=ScheduleResponse)
async def schedule(
    day: Optional[date] = Query(None, alias="date"),
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Get the doctor's schedule for one day."""
    return ScheduleService(db, identity).view(day)


@router.post("/schedule/slots", response_model=ScheduleResponse, status_code=201)
async def add_slot(
    form: SlotCreate,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Add an available, blocked or booked slot."""
    service = ScheduleService(db, identity)
    slot = service.add_slot(form)
    return service.view(slot.appointment_date, message="Time slot added successfully")


@router.patch("/schedule/{slot_id}/status", response_model=ScheduleResponse)
async def change_slot_status(
    slot_id: str,
    form: SlotStatusUpdate,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Block, unblock, book, complete or cancel a slot."""
    service = ScheduleService(db, identity)
    slot = service.change_status(slot_id, form)
    return service.view(slot.appointment_date, message="Appointment updated successfully")


@router.patch("/schedule/{slot_id}/reschedule", response_model=ScheduleResponse)
async def reschedule_slot(
    slot_id: str,
    form: SlotReschedule,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Move a booked slot to another date and time."""
    service = ScheduleService(db, identity)
    slot = service.reschedule(slot_id, form)
    return service.view(slot.appointment_date, message="Appointment rescheduled successfully")


# Consultations booked by patients
@router.get("/consultations", response_model=ConsultationListResponse)
async def consultations(
    status: Optional[AppointmentStatus] = None,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """List the bookings patients made with this doctor."""
    return ConsultationService(db, identity).view(status)


@router.patch("/consultations/{appointment_id}", response_model=ConsultationListResponse)
async def update_consultation(
    appointment_id: str,
    form: ConsultationUpdate,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Record status, diagnosis, prescription or notes on a booking."""
    service = ConsultationService(db, identity)
    service.update(appointment_id, form)
    return service.view(message="Consultation updated successfully")


# Profile
@router.get("/profile", response_model=DoctorProfileResponse)
async def profile(
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Get the doctor's profile."""
    return DoctorProfileService(db, identity).view()


@router.patch("/profile", response_model=DoctorProfileResponse)
async def update_profile(
    form: DoctorProfileUpdate,
    identity: Identity = Depends(get_doctor),
    db: Session = Depends(get_db)
):
    """Edit the doctor's profile."""
    service = DoctorProfileService(db, identity)
    service.update(form)
    return service.view(message="Profile updated successfully")
