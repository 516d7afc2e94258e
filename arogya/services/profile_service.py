from typing import Optional
import logging

from ..core.errors import RecordNotFoundError
from ..models.doctor import Doctor
from ..models.patient_profile import PatientProfile
from ..schemas.profile import (
    DoctorProfileResponse, DoctorProfileUpdate, PatientProfileResponse, PatientProfileUpdate
)
from .base import ScopedService
from .text import initials

logger = logging.getLogger(__name__)


class DoctorProfileService(ScopedService):

    def get(self) -> Doctor:
        with self.operation("Failed to load profile"):
            doctor = self.db.query(Doctor).filter(Doctor.id == self.identity.id).first()
        if not doctor:
            raise RecordNotFoundError("Profile not found")
        return doctor

    def view(self, message: Optional[str] = None) -> DoctorProfileResponse:
        doctor = self.get()
        return DoctorProfileResponse(
            id=doctor.id,
            full_name=doctor.full_name,
            initials=initials(doctor.full_name),
            specialization=doctor.specialization,
            medical_license=doctor.medical_license,
            experience_years=doctor.experience_years or 0,
            consultation_fee=float(doctor.consultation_fee or 0),
            languages=list(doctor.languages or []),
            verified=bool(doctor.verified),
            avatar_url=doctor.avatar_url,
            message=message,
        )

    def update(self, form: DoctorProfileUpdate) -> Doctor:
        doctor = self.get()
        with self.operation("Failed to update profile"):
            for field, value in form.changes().items():
                setattr(doctor, field, value)
            self.db.commit()
        logger.info(f"Doctor {self.identity.id} updated profile")
        return doctor


class PatientProfileService(ScopedService):

    def get(self) -> PatientProfile:
        with self.operation("Failed to load profile"):
            profile = self.db.query(PatientProfile).filter(
                PatientProfile.id == self.identity.id
            ).first()
        if not profile:
            raise RecordNotFoundError("Profile not found")
        return profile

    def view(self, message: Optional[str] = None) -> PatientProfileResponse:
        profile = self.get()
        return PatientProfileResponse(
            id=profile.id,
            full_name=profile.full_name,
            initials=initials(profile.full_name),
            age=profile.age,
            gender=profile.gender,
            phone=profile.phone,
            address=profile.address,
            blood_group=profile.blood_group,
            emergency_contact=profile.emergency_contact,
            emergency_contact_phone=profile.emergency_contact_phone,
            allergies=list(profile.allergies or []),
            current_medications=list(profile.current_medications or []),
            medical_history=list(profile.medical_history or []),
            avatar_url=profile.avatar_url,
            message=message,
        )

    def update(self, form: PatientProfileUpdate) -> PatientProfile:
        profile = self.get()
        with self.operation("Failed to update profile"):
            for field, value in form.changes().items():
                setattr(profile, field, value)
            self.db.commit()
        logger.info(f"Patient {self.identity.id} updated profile")
        return profile
