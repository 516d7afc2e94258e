from typing import List, Optional

from pydantic import BaseModel, field_validator

from ..services.text import split_list
from .common import check_length, coerce_int, strip_or_none


class DoctorProfileResponse(BaseModel):
    id: str
    full_name: str
    initials: str
    specialization: str
    medical_license: str
    experience_years: int
    consultation_fee: float
    languages: List[str]
    verified: bool
    avatar_url: Optional[str] = None
    message: Optional[str] = None


class DoctorProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    specialization: Optional[str] = None
    experience_years: Optional[int] = None
    consultation_fee: Optional[float] = None
    languages: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def check_name(cls, v):
        if v is None:
            return v
        return check_length(v.strip(), 2, too_short="Full name is required")

    @field_validator("specialization")
    @classmethod
    def check_specialization(cls, v):
        if v is None:
            return v
        return check_length(v.strip(), 2, too_short="Specialization is required")

    @field_validator("experience_years", mode="before")
    @classmethod
    def check_experience(cls, v):
        if v is None:
            return v
        years = coerce_int(v, "Experience must be a number")
        if years < 0 or years > 80:
            raise ValueError("Experience must be between 0 and 80 years")
        return years

    @field_validator("consultation_fee")
    @classmethod
    def check_fee(cls, v):
        if v is not None and v < 0:
            raise ValueError("Consultation fee cannot be negative")
        return v

    @field_validator("avatar_url", mode="before")
    @classmethod
    def blank_avatar(cls, v):
        return strip_or_none(v)

    def changes(self) -> dict:
        values = {k: v for k, v in self.model_dump(exclude_unset=True).items()
                  if v is not None or k == "avatar_url"}
        if "languages" in values:
            values["languages"] = split_list(values["languages"])
        return values


class PatientProfileResponse(BaseModel):
    id: str
    full_name: str
    initials: str
    age: int
    gender: str
    phone: str
    address: Optional[str] = None
    blood_group: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    allergies: List[str] = []
    current_medications: List[str] = []
    medical_history: List[str] = []
    avatar_url: Optional[str] = None
    message: Optional[str] = None


class PatientProfileUpdate(BaseModel):
    full_name: str
    phone: str
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    blood_group: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
    medical_history: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(v.strip(), 2, too_short="Full name is required")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return check_length(v.strip(), 10, too_short="Phone number must be at least 10 digits")

    @field_validator("address", "emergency_contact", "emergency_contact_phone", "blood_group", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return strip_or_none(v)

    def changes(self) -> dict:
        values = self.model_dump(exclude_unset=True)
        for field in ("allergies", "current_medications", "medical_history"):
            if field in values:
                values[field] = split_list(values[field])
        return values
