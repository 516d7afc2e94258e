from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...api.deps import get_patient
from ...core.database import get_db
from ...core.security import Identity
from ...schemas.veterinary import (
    AnimalRecordForm, AnimalRecordsResponse, EmergencyResponse, KnowledgeResponse,
    VetBookingCreate, VeterinaryAppointmentsResponse
)
from ...services import knowledge
from ...services.veterinary_service import AnimalRecordService, VetAppointmentService

router = APIRouter(tags=["Veterinary Services"])


@router.get("/veterinary-appointments", response_model=VeterinaryAppointmentsResponse)
async def vet_appointments(
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Verified vets, own animals and own vet appointments."""
    return VetAppointmentService(db, identity).view()


@router.post("/veterinary-appointments", response_model=VeterinaryAppointmentsResponse, status_code=201)
async def book_vet_appointment(
    form: VetBookingCreate,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Book a pending visit with a verified vet."""
    service = VetAppointmentService(db, identity)
    service.book(form)
    return service.view(message="Appointment booked successfully")


@router.post("/veterinary-appointments/{appointment_id}/cancel", response_model=VeterinaryAppointmentsResponse)
async def cancel_vet_appointment(
    appointment_id: str,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Cancel one of the patient's vet appointments."""
    service = VetAppointmentService(db, identity)
    service.cancel(appointment_id)
    return service.view(message="Appointment cancelled")


# Animal health records
@router.get("/animal-records", response_model=AnimalRecordsResponse)
async def animal_records(
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """List the patient's animals."""
    return AnimalRecordService(db, identity).view()


@router.post("/animal-records", response_model=AnimalRecordsResponse, status_code=201)
async def add_animal_record(
    form: AnimalRecordForm,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Add an animal health record."""
    service = AnimalRecordService(db, identity)
    service.add(form)
    return service.view(message="Animal record added successfully")


@router.patch("/animal-records/{record_id}", response_model=AnimalRecordsResponse)
async def update_animal_record(
    record_id: str,
    form: AnimalRecordForm,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Edit an animal health record."""
    service = AnimalRecordService(db, identity)
    service.update(record_id, form)
    return service.view(message="Animal record updated successfully")


@router.delete("/animal-records/{record_id}", response_model=AnimalRecordsResponse)
async def delete_animal_record(
    record_id: str,
    identity: Identity = Depends(get_patient),
    db: Session = Depends(get_db)
):
    """Delete an animal health record."""
    service = AnimalRecordService(db, identity)
    service.delete(record_id)
    return service.view(message="Animal record deleted successfully")


# Static guidance
@router.get("/veterinary-emergency", response_model=EmergencyResponse)
async def vet_emergency(identity: Identity = Depends(get_patient)):
    """Emergency helpline, warning signs and first aid."""
    return knowledge.emergency()


@router.get("/veterinary-knowledge", response_model=KnowledgeResponse)
async def vet_knowledge(identity: Identity = Depends(get_patient)):
    """Vaccination, disease, fodder and when-to-call-a-vet guides."""
    return knowledge.knowledge()
