from sqlalchemy import Column, String, ForeignKey, DateTime, Date, Time, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base
from .types import new_id


class AppointmentStatus(str, enum.Enum):
    # Booking lifecycle (patient and veterinary bookings)
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    # Doctor schedule slots
    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"


class Appointment(Base):
    """A slot on a doctor's own schedule."""

    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=new_id)

    # Relationships
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=True)
    patient_name = Column(String(255), nullable=True)

    # Appointment details
    appointment_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    status = Column(String(20), nullable=False, default=AppointmentStatus.AVAILABLE.value)
    notes = Column(Text, nullable=True)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    doctor = relationship("Doctor", back_populates="appointments")
    patient = relationship("Patient", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, date='{self.appointment_date}', status='{self.status}')>"
