from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from arogya.schemas.appointment import BookingCreate, SlotCreate, SlotStatusUpdate
from arogya.schemas.patient import PatientCreate, PatientUpdate
from arogya.schemas.profile import DoctorProfileUpdate
from arogya.schemas.veterinary import AnimalRecordForm, VetSlot
from arogya.services.text import initials, matches, split_list, surname

valid_patient = {
    "full_name": "Harjit Kaur",
    "age": "55",
    "gender": "Female",
    "phone": "9876543210",
    "village": "Bhadson",
}


def first_message(exc: ValidationError, field: str) -> str:
    for error in exc.errors():
        if error["loc"] == (field,):
            return str(error["ctx"]["error"])
    raise AssertionError(f"no error for {field}")


def test_split_list_drops_blank_entries():
    assert split_list("Diabetes, , Hypertension ") == ["Diabetes", "Hypertension"]
    assert split_list("") == []
    assert split_list(None) == []


def test_initials_and_surname():
    assert initials("Harjit Kaur") == "HK"
    assert initials("Dr. Anita Sharma") == "DA"
    assert surname("Dr. Anita Sharma") == "Sharma"


def test_matches_is_case_insensitive():
    assert matches("sharma", "Ravi Sharma", "Nabha")
    assert matches("DIAB", "Ravi", "Nabha", extra=["Diabetes"])
    assert not matches("kaur", "Ravi Sharma", "Nabha")
    assert matches("", "anything")


def test_patient_create_parses_conditions():
    form = PatientCreate(**valid_patient, conditions="Diabetes, , Hypertension ")
    assert form.age == 55
    assert form.condition_list == ["Diabetes", "Hypertension"]


@pytest.mark.parametrize("field, value, message", [
    ("full_name", "A", "Name must be at least 2 characters"),
    ("full_name", "A" * 101, "Name must be less than 100 characters"),
    ("age", "0", "Age must be at least 1"),
    ("age", "151", "Age must be valid"),
    ("gender", "", "Please select a gender"),
    ("phone", "12345", "Phone number must be at least 10 digits"),
    ("village", "", "Village name is required"),
])
def test_patient_rules(field, value, message):
    with pytest.raises(ValidationError) as exc:
        PatientCreate(**{**valid_patient, field: value})
    assert first_message(exc.value, field) == message


def test_patient_update_keeps_unset_fields_out():
    form = PatientUpdate(conditions="Asthma", status="inactive")
    assert form.changes() == {"conditions": ["Asthma"], "status": "inactive"}


def test_booking_date_cannot_be_past():
    yesterday = date.today() - timedelta(days=1)
    with pytest.raises(ValidationError) as exc:
        BookingCreate(doctor_id="d1", appointment_date=yesterday, start_time="10:00")
    assert first_message(exc.value, "appointment_date") == "Appointment date cannot be in the past"


def test_booked_slot_needs_patient():
    with pytest.raises(ValidationError):
        SlotCreate(appointment_date=date.today(), start_time="10:00", status="booked")
    slot = SlotCreate(appointment_date=date.today(), start_time="10:00", status="booked", patient_name="Walk-in")
    assert slot.patient_name == "Walk-in"


def test_doctor_profile_languages():
    form = DoctorProfileUpdate(languages="Hindi, Punjabi,", experience_years="12")
    assert form.changes() == {"languages": ["Hindi", "Punjabi"], "experience_years": 12}


def test_doctor_profile_experience_bounds():
    with pytest.raises(ValidationError) as exc:
        DoctorProfileUpdate(experience_years=81)
    assert first_message(exc.value, "experience_years") == "Experience must be between 0 and 80 years"


def test_animal_record_requires_tag_and_species():
    with pytest.raises(ValidationError) as exc:
        AnimalRecordForm(animal_id=" ", species="Cow")
    assert first_message(exc.value, "animal_id") == "Please fill required fields"

    form = AnimalRecordForm(animal_id="NBH-COW-001", species="Cow", age="", last_vaccination="")
    assert form.age == 0
    assert form.last_vaccination is None


def test_status_change_to_booked_needs_patient():
    with pytest.raises(ValidationError):
        SlotStatusUpdate(status="booked")
    assert SlotStatusUpdate(status="blocked").patient_id is None


def test_vet_slot_fields_are_text():
    assert VetSlot(date="2030-05-01", time="10:00").time == "10:00"
    with pytest.raises(ValidationError):
        VetSlot(date=20300501, time="10:00")
