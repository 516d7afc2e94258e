from sqlalchemy import Column, Integer, String, DateTime, Boolean, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base
from .types import StringList


class Doctor(Base):
    __tablename__ = "doctors"

    # Same id as the auth identity
    id = Column(String(36), primary_key=True)

    # Professional information
    full_name = Column(String(255), nullable=False)
    medical_license = Column(String(100), nullable=False)
    specialization = Column(String(255), nullable=False)
    experience_years = Column(Integer, nullable=False, default=0)
    consultation_fee = Column(Numeric(10, 2), nullable=False, default=0)
    languages = Column(StringList, nullable=False, default=list)
    verified = Column(Boolean, nullable=False, default=False)
    avatar_url = Column(String(500), nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    patients = relationship("Patient", back_populates="doctor")
    appointments = relationship("Appointment", back_populates="doctor")
    patient_appointments = relationship("PatientAppointment", back_populates="doctor")

    def __repr__(self):
        return f"<Doctor(id={self.id}, name='{self.full_name}', specialization='{self.specialization}')>"
