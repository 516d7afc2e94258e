from .user import UserRole
from .doctor import Doctor
from .patient import Patient, PatientStatus
from .appointment import Appointment, AppointmentStatus
from .patient_profile import PatientProfile, PatientAppointment
from .veterinary import VeterinaryDoctor, AnimalHealthRecord, VetAppointment

__all__ = [
    "UserRole",
    "Doctor",
    "Patient",
    "PatientStatus",
    "Appointment",
    "AppointmentStatus",
    "PatientProfile",
    "PatientAppointment",
    "VeterinaryDoctor",
    "AnimalHealthRecord",
    "VetAppointment",
]
