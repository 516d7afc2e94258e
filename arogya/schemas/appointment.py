from datetime import date, time
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..models.appointment import AppointmentStatus
from .common import check_length, strip_or_none


# Doctor schedule

class SlotCreate(BaseModel):
    appointment_date: date
    start_time: time
    status: Literal["available", "blocked", "booked"] = "available"
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("patient_name", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return strip_or_none(v)

    @model_validator(mode="after")
    def booked_needs_patient(self):
        if self.status == "booked" and not (self.patient_id or self.patient_name):
            raise ValueError("A booked slot needs a patient")
        return self


class SlotStatusUpdate(BaseModel):
    status: AppointmentStatus
    # Only read when booking an available slot
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None

    @field_validator("patient_name", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return strip_or_none(v)

    @model_validator(mode="after")
    def booked_needs_patient(self):
        if self.status is AppointmentStatus.BOOKED and not (self.patient_id or self.patient_name):
            raise ValueError("A booked slot needs a patient")
        return self


class SlotReschedule(BaseModel):
    appointment_date: date
    start_time: time


class ScheduleEntry(BaseModel):
    id: str
    start_time: str
    end_time: str
    status: str
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    notes: Optional[str] = None
    action: Optional[str] = None


class ScheduleResponse(BaseModel):
    date: date
    label: str
    previous_date: date
    next_date: date
    appointments: List[ScheduleEntry]
    message: Optional[str] = None


# Doctor dashboard

class TodayStats(BaseModel):
    total_appointments: int
    completed: int
    pending: int
    total_patients: int


class DashboardResponse(BaseModel):
    greeting: str
    doctor_name: str
    today: str
    stats: TodayStats


# Patient bookings

class DoctorSummary(BaseModel):
    id: str
    full_name: str
    specialization: str
    consultation_fee: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class BookingCreate(BaseModel):
    doctor_id: str
    appointment_date: date
    start_time: time
    symptoms: Optional[str] = None

    @field_validator("doctor_id")
    @classmethod
    def check_doctor(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please choose a doctor")
        return v.strip()

    @field_validator("appointment_date")
    @classmethod
    def not_in_past(cls, v: date) -> date:
        if v < date.today():
            raise ValueError("Appointment date cannot be in the past")
        return v

    @field_validator("symptoms", mode="before")
    @classmethod
    def trim_symptoms(cls, v):
        v = strip_or_none(v)
        if v is not None:
            check_length(v, maximum=1000, too_long="Symptoms must be less than 1000 characters")
        return v


class PatientAppointmentResponse(BaseModel):
    id: str
    appointment_date: date
    start_time: str
    end_time: str
    status: str
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None
    doctor: Optional[DoctorSummary] = None


class PatientAppointmentsResponse(BaseModel):
    upcoming: List[PatientAppointmentResponse]
    past: List[PatientAppointmentResponse]
    doctors: List[DoctorSummary]
    message: Optional[str] = None


class PatientDashboardStats(BaseModel):
    upcoming_appointments: int
    total_appointments: int
    medical_records: int


class PatientDashboardResponse(BaseModel):
    stats: PatientDashboardStats
    recent_appointments: List[PatientAppointmentResponse]


class MedicalRecordsResponse(BaseModel):
    current_medications: List[str]
    medical_history: List[str]
    allergies: List[str]
    records: List[PatientAppointmentResponse]


# Doctor-side consultation on a patient booking

class ConsultationUpdate(BaseModel):
    status: Optional[AppointmentStatus] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("diagnosis", "prescription", "notes", mode="before")
    @classmethod
    def trim(cls, v):
        v = strip_or_none(v)
        if v is not None:
            check_length(v, maximum=2000, too_long="Must be less than 2000 characters")
        return v


class ConsultationResponse(BaseModel):
    id: str
    patient_id: str
    patient_name: Optional[str] = None
    appointment_date: date
    start_time: str
    end_time: str
    status: str
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None


class ConsultationListResponse(BaseModel):
    consultations: List[ConsultationResponse]
    message: Optional[str] = None
