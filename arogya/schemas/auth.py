from typing import Optional, Literal

from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, field_validator

from ..core.security import Role
from .common import check_length, coerce_int, strip_or_none


class Credentials(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        try:
            validate_email(v.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email address")
        return v.strip()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return check_length(v, 6, too_short="Password must be at least 6 characters")


class SignIn(Credentials):
    pass


class DoctorSignUp(Credentials):
    full_name: str
    medical_license: str
    specialization: str

    @field_validator("full_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(v.strip(), 2, too_short="Full name is required")

    @field_validator("medical_license")
    @classmethod
    def check_license(cls, v: str) -> str:
        return check_length(v.strip(), 5, too_short="Medical license is required")

    @field_validator("specialization")
    @classmethod
    def check_specialization(cls, v: str) -> str:
        return check_length(v.strip(), 2, too_short="Specialization is required")

    def metadata(self) -> dict:
        return {
            "full_name": self.full_name,
            "medical_license": self.medical_license,
            "specialization": self.specialization,
            "role": Role.DOCTOR.value,
        }


class PatientSignUp(Credentials):
    full_name: str
    age: int
    gender: str
    phone: str
    address: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(v.strip(), 2, too_short="Full name is required")

    @field_validator("age", mode="before")
    @classmethod
    def check_age(cls, v) -> int:
        age = coerce_int(v, "Age must be a number")
        if age < 1:
            raise ValueError("Age must be at least 1")
        return age

    @field_validator("gender")
    @classmethod
    def check_gender(cls, v: str) -> str:
        if v not in ("Male", "Female", "Other"):
            raise ValueError("Please select a gender")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return check_length(v.strip(), 10, too_short="Phone number must be at least 10 digits")

    @field_validator("address", mode="before")
    @classmethod
    def blank_address(cls, v):
        return strip_or_none(v)

    def metadata(self) -> dict:
        return {
            "full_name": self.full_name,
            "age": self.age,
            "gender": self.gender,
            "phone": self.phone,
            "address": self.address,
            "role": Role.PATIENT.value,
        }


class IdentityResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: Role


class SessionResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: IdentityResponse
    redirect_to: str


class SignUpResponse(BaseModel):
    message: str
    user_id: Optional[str] = None
    role: Literal["doctor", "patient"]
