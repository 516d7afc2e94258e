import json
import os
import time
from datetime import date, time as clock

import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set testing environment before the application reads its settings
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SUPABASE_URL"] = "http://auth.test"
os.environ["SUPABASE_JWT_SECRET"] = "test-secret-for-signing-access-tokens-0123456789"

from arogya.main import app  # noqa: E402
from arogya.api.deps import get_auth_client  # noqa: E402
from arogya.core.config import settings  # noqa: E402
from arogya.core.database import get_db, Base  # noqa: E402
from arogya.models import (  # noqa: E402
    Doctor, Patient, PatientProfile, PatientAppointment, UserRole, VeterinaryDoctor,
    AnimalHealthRecord
)
from arogya.services.auth_service import AuthClient  # noqa: E402

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DOCTOR_ID = "11111111-1111-1111-1111-111111111111"
OTHER_DOCTOR_ID = "22222222-2222-2222-2222-222222222222"
PATIENT_ID = "33333333-3333-3333-3333-333333333333"
OTHER_PATIENT_ID = "44444444-4444-4444-4444-444444444444"


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def make_token(user_id: str, email: str = "user@example.com", metadata: dict = None,
               expires_in: int = 3600, secret: str = None) -> str:
    """Access token shaped like the ones the managed backend issues."""
    payload = {
        "sub": user_id,
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
        "user_metadata": metadata or {},
    }
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_header(user_id: str, **kwargs) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


class AuthBackend:
    """In-memory stand-in for the backend's auth REST API."""

    def __init__(self):
        self.requests = []
        self.users = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        body = json.loads(request.content) if request.content else {}

        if path == "/auth/v1/signup":
            if body["email"] in self.users:
                return httpx.Response(422, json={"msg": "User already registered"})
            user_id = f"00000000-0000-0000-0000-{len(self.users) + 1:012d}"
            self.users[body["email"]] = {
                "id": user_id,
                "email": body["email"],
                "password": body["password"],
                "user_metadata": body.get("data", {}),
            }
            return httpx.Response(200, json={"id": user_id, "email": body["email"]})

        if path == "/auth/v1/token":
            user = self.users.get(body.get("email"))
            if not user or user["password"] != body.get("password"):
                return httpx.Response(400, json={
                    "error": "invalid_grant",
                    "error_description": "Invalid login credentials",
                })
            return httpx.Response(200, json={
                "access_token": make_token(user["id"], user["email"], user["user_metadata"]),
                "refresh_token": "refresh-token",
                "token_type": "bearer",
                "expires_in": 3600,
                "user": {
                    "id": user["id"],
                    "email": user["email"],
                    "user_metadata": user["user_metadata"],
                },
            })

        if path == "/auth/v1/logout":
            return httpx.Response(204)

        return httpx.Response(404, json={"msg": "Not found"})


@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth_backend():
    backend = AuthBackend()
    client = AuthClient(
        base_url=settings.SUPABASE_URL,
        transport=httpx.MockTransport(backend.handler),
    )
    app.dependency_overrides[get_auth_client] = lambda: client
    yield backend
    app.dependency_overrides.pop(get_auth_client, None)


@pytest.fixture
def client(test_db, auth_backend):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture
def doctor(db_session):
    doctor = Doctor(
        id=DOCTOR_ID,
        full_name="Dr. Anita Sharma",
        medical_license="PMC-12345",
        specialization="General Medicine",
        experience_years=8,
        consultation_fee=300,
        languages=["Hindi", "Punjabi"],
        verified=True,
    )
    db_session.add_all([doctor, UserRole(user_id=DOCTOR_ID, role="doctor")])
    db_session.commit()
    return doctor


@pytest.fixture
def other_doctor(db_session):
    doctor = Doctor(
        id=OTHER_DOCTOR_ID,
        full_name="Dr. Rajesh Kumar",
        medical_license="PMC-67890",
        specialization="Pediatrics",
        verified=False,
    )
    db_session.add_all([doctor, UserRole(user_id=OTHER_DOCTOR_ID, role="doctor")])
    db_session.commit()
    return doctor


@pytest.fixture
def patient_profile(db_session):
    profile = PatientProfile(
        id=PATIENT_ID,
        full_name="Gurpreet Singh",
        age=42,
        gender="Male",
        phone="9876500000",
        address="Nabha",
        allergies=["Penicillin"],
        current_medications=["Metformin"],
        medical_history=["Diabetes"],
    )
    db_session.add_all([profile, UserRole(user_id=PATIENT_ID, role="patient")])
    db_session.commit()
    return profile


@pytest.fixture
def doctor_headers(doctor):
    return auth_header(DOCTOR_ID, email="anita@example.com")


@pytest.fixture
def patient_headers(patient_profile):
    return auth_header(PATIENT_ID, email="gurpreet@example.com")


@pytest.fixture
def make_patient(db_session):
    def _make(**overrides):
        values = {
            "doctor_id": DOCTOR_ID,
            "full_name": "Harjit Kaur",
            "age": 55,
            "gender": "Female",
            "phone": "9876543210",
            "village": "Bhadson",
            "conditions": [],
            "total_visits": 0,
        }
        values.update(overrides)
        patient = Patient(**values)
        db_session.add(patient)
        db_session.commit()
        return patient
    return _make


@pytest.fixture
def make_booking(db_session):
    def _make(appointment_date: date, status: str = "pending", **overrides):
        values = {
            "patient_id": PATIENT_ID,
            "doctor_id": DOCTOR_ID,
            "appointment_date": appointment_date,
            "start_time": clock(10, 0),
            "end_time": clock(10, 30),
            "status": status,
        }
        values.update(overrides)
        booking = PatientAppointment(**values)
        db_session.add(booking)
        db_session.commit()
        return booking
    return _make


@pytest.fixture
def vet(db_session):
    vet = VeterinaryDoctor(
        full_name="Dr. Manpreet Gill",
        specialization="Large Animal Medicine",
        phone="9812345678",
        available_slots=[
            {"date": "2030-05-01", "time": "10:00"},
            {"date": "2030-05-01", "time": "11:00"},
            {"date": "2030-05-02", "time": "09:00"},
        ],
        verified=True,
    )
    db_session.add(vet)
    db_session.commit()
    return vet


@pytest.fixture
def animal(db_session, patient_profile):
    animal = AnimalHealthRecord(
        patient_id=PATIENT_ID,
        animal_id="NBH-COW-001",
        species="Cow",
        breed="Sahiwal",
        age=4,
    )
    db_session.add(animal)
    db_session.commit()
    return animal
