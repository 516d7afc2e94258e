from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base
from .types import StringList, new_id


class PatientStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Patient(Base):
    """A clinical record kept by one doctor."""

    __tablename__ = "patients"

    id = Column(String(36), primary_key=True, default=new_id)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)

    # Personal information
    full_name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(20), nullable=False)
    phone = Column(String(15), nullable=False)
    village = Column(String(100), nullable=False)

    # Medical information
    conditions = Column(StringList, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=PatientStatus.ACTIVE.value)

    # Visit counters
    total_visits = Column(Integer, nullable=False, default=0)
    last_visit_date = Column(Date, nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    doctor = relationship("Doctor", back_populates="patients")
    appointments = relationship("Appointment", back_populates="patient")

    def __repr__(self):
        return f"<Patient(id={self.id}, name='{self.full_name}', village='{self.village}')>"
