from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..models.patient import PatientStatus
from ..services.text import split_list
from .common import check_length, coerce_int


class PatientRules(BaseModel):
    """Field rules shared by the create and edit forms."""

    @field_validator("full_name", check_fields=False)
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return check_length(
            v.strip(), 2, 100,
            too_short="Name must be at least 2 characters",
            too_long="Name must be less than 100 characters",
        )

    @field_validator("age", mode="before", check_fields=False)
    @classmethod
    def check_age(cls, v):
        if v is None:
            return v
        age = coerce_int(v, "Age must be a number")
        if age < 1:
            raise ValueError("Age must be at least 1")
        if age > 150:
            raise ValueError("Age must be valid")
        return age

    @field_validator("gender", check_fields=False)
    @classmethod
    def check_gender(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Please select a gender")
        return v.strip()

    @field_validator("phone", check_fields=False)
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return check_length(
            v.strip(), 10, 15,
            too_short="Phone number must be at least 10 digits",
            too_long="Phone number must be less than 15 digits",
        )

    @field_validator("village", check_fields=False)
    @classmethod
    def check_village(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return check_length(
            v.strip(), 2, 100,
            too_short="Village name is required",
            too_long="Village name must be less than 100 characters",
        )

    @field_validator("conditions", check_fields=False)
    @classmethod
    def check_conditions(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return check_length(
            v.strip(), maximum=500,
            too_long="Conditions must be less than 500 characters",
        )

    @field_validator("notes", check_fields=False)
    @classmethod
    def check_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        check_length(v, maximum=2000, too_long="Notes must be less than 2000 characters")
        return v or None


class PatientCreate(PatientRules):
    """New patient form. ``conditions`` is the raw comma-separated text."""

    full_name: str
    age: int
    gender: str
    phone: str
    village: str
    conditions: str = ""
    notes: Optional[str] = None

    @property
    def condition_list(self) -> List[str]:
        return split_list(self.conditions)


class PatientUpdate(PatientRules):
    full_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    village: Optional[str] = None
    conditions: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[PatientStatus] = None

    def changes(self) -> dict:
        values = self.model_dump(exclude_unset=True)
        for required in ("full_name", "age", "gender", "phone", "village", "status"):
            if values.get(required, "") is None:
                values.pop(required)
        if "conditions" in values:
            values["conditions"] = split_list(values["conditions"])
        if "status" in values:
            values["status"] = PatientStatus(values["status"]).value
        return values


class PatientResponse(BaseModel):
    id: str
    full_name: str
    initials: str = ""
    age: int
    gender: str
    phone: str
    village: str
    conditions: List[str]
    notes: Optional[str] = None
    status: str
    total_visits: int
    last_visit_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class PatientStats(BaseModel):
    total: int
    active: int
    follow_up: int


class PatientListResponse(BaseModel):
    patients: List[PatientResponse]
    stats: PatientStats
    shown: int
    search: str = ""
    message: Optional[str] = None
