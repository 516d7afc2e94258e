from sqlalchemy import Column, Integer, String, DateTime, Date, Time, Text, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base
from .appointment import AppointmentStatus
from .types import StringList, new_id


class PatientProfile(Base):
    """A patient's own account profile, keyed by the auth identity."""

    __tablename__ = "patient_profiles"

    id = Column(String(36), primary_key=True)

    # Personal information
    full_name = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=False)
    phone = Column(String(20), nullable=False)
    address = Column(String(500), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    # Emergency contact
    emergency_contact = Column(String(255), nullable=True)
    emergency_contact_phone = Column(String(20), nullable=True)

    # Medical information
    blood_group = Column(String(10), nullable=True)
    allergies = Column(StringList, nullable=True)
    current_medications = Column(StringList, nullable=True)
    medical_history = Column(StringList, nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    appointments = relationship("PatientAppointment", back_populates="patient")

    def __repr__(self):
        return f"<PatientProfile(id={self.id}, name='{self.full_name}')>"


class PatientAppointment(Base):
    """A booking a patient made with a doctor."""

    __tablename__ = "patient_appointments"

    id = Column(String(36), primary_key=True, default=new_id)
    patient_id = Column(String(36), ForeignKey("patient_profiles.id"), nullable=False, index=True)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)

    appointment_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING.value)

    # Consultation
    symptoms = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    prescription = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("PatientProfile", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="patient_appointments")

    def __repr__(self):
        return f"<PatientAppointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, date='{self.appointment_date}')>"
