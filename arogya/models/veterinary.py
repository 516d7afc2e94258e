from sqlalchemy import Column, Integer, String, DateTime, Date, Boolean, Text, ForeignKey, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base
from .appointment import AppointmentStatus
from .types import new_id


class VeterinaryDoctor(Base):
    __tablename__ = "veterinary_doctors"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    # [{"date": "2024-05-01", "time": "10:00"}, ...]
    available_slots = Column(JSON, nullable=True)
    verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    appointments = relationship("VetAppointment", back_populates="vet")

    def __repr__(self):
        return f"<VeterinaryDoctor(id={self.id}, name='{self.full_name}')>"


class AnimalHealthRecord(Base):
    __tablename__ = "animal_health_records"

    id = Column(String(36), primary_key=True, default=new_id)
    # Owner is the patient identity
    patient_id = Column(String(36), nullable=False, index=True)
    assigned_vet_id = Column(String(36), ForeignKey("veterinary_doctors.id"), nullable=True)

    animal_id = Column(String(100), nullable=False)  # owner's tag, e.g. NBH-COW-001
    species = Column(String(100), nullable=False)
    breed = Column(String(100), nullable=True)
    age = Column(Integer, nullable=True)
    last_vaccination = Column(Date, nullable=True)
    current_treatment = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    appointments = relationship("VetAppointment", back_populates="animal")

    def __repr__(self):
        return f"<AnimalHealthRecord(id={self.id}, animal_id='{self.animal_id}', species='{self.species}')>"


class VetAppointment(Base):
    __tablename__ = "vet_appointments"

    id = Column(String(36), primary_key=True, default=new_id)
    patient_id = Column(String(36), nullable=False, index=True)
    vet_id = Column(String(36), ForeignKey("veterinary_doctors.id"), nullable=False)
    animal_id = Column(String(36), ForeignKey("animal_health_records.id"), nullable=True)

    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING.value)

    notes = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    treatment_plan = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    vet = relationship("VeterinaryDoctor", back_populates="appointments")
    animal = relationship("AnimalHealthRecord", back_populates="appointments")

    def __repr__(self):
        return f"<VetAppointment(id={self.id}, vet_id={self.vet_id}, date='{self.appointment_date}')>"
