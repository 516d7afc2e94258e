from datetime import date, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .common import check_length, coerce_int, strip_or_none


class AnimalRecordForm(BaseModel):
    animal_id: str
    species: str
    breed: Optional[str] = None
    age: int = 0
    last_vaccination: Optional[date] = None
    current_treatment: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("animal_id", "species")
    @classmethod
    def required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill required fields")
        return v.strip()

    @field_validator("breed", "current_treatment", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return strip_or_none(v)

    @field_validator("last_vaccination", mode="before")
    @classmethod
    def blank_date(cls, v):
        return strip_or_none(v)

    @field_validator("age", mode="before")
    @classmethod
    def check_age(cls, v) -> int:
        age = coerce_int(v, "Age must be a number")
        if age < 0 or age > 100:
            raise ValueError("Age must be between 0 and 100")
        return age


class AnimalRecordResponse(BaseModel):
    id: str
    animal_id: str
    species: str
    breed: Optional[str] = None
    age: Optional[int] = None
    last_vaccination: Optional[date] = None
    current_treatment: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AnimalRecordsResponse(BaseModel):
    animals: List[AnimalRecordResponse]
    message: Optional[str] = None


class VetSlot(BaseModel):
    date: Optional[str] = None
    time: Optional[str] = None


class VetDoctorResponse(BaseModel):
    id: str
    full_name: str
    specialization: str
    phone: Optional[str] = None
    next_slots: List[VetSlot] = []


class AnimalOption(BaseModel):
    id: str
    animal_id: str
    species: str

    model_config = ConfigDict(from_attributes=True)


class VetBookingCreate(BaseModel):
    vet_id: str
    animal_id: str
    appointment_date: date
    appointment_time: time
    notes: Optional[str] = None

    @field_validator("vet_id", "animal_id")
    @classmethod
    def required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill all required fields")
        return v.strip()

    @field_validator("notes", mode="before")
    @classmethod
    def trim_notes(cls, v):
        v = strip_or_none(v)
        if v is not None:
            check_length(v, maximum=2000, too_long="Notes must be less than 2000 characters")
        return v


class VetAppointmentResponse(BaseModel):
    id: str
    appointment_date: date
    appointment_time: str
    status: str
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    vet_name: Optional[str] = None
    vet_specialization: Optional[str] = None
    animal_tag: Optional[str] = None
    animal_species: Optional[str] = None


class VeterinaryAppointmentsResponse(BaseModel):
    vets: List[VetDoctorResponse]
    animals: List[AnimalOption]
    appointments: List[VetAppointmentResponse]
    message: Optional[str] = None


class GuideEntry(BaseModel):
    title: str
    detail: Optional[str] = None


class GuideSection(BaseModel):
    title: str
    description: Optional[str] = None
    entries: List[GuideEntry]


class EmergencyResponse(BaseModel):
    helpline: str
    call_link: str
    whatsapp_link: Optional[str] = None
    warning_signs: List[GuideEntry]
    first_aid: List[str]


class KnowledgeResponse(BaseModel):
    sections: List[GuideSection]
    footer: str
