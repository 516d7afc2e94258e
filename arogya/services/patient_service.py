from datetime import date
from typing import List, Optional
import logging

from ..core.errors import RecordNotFoundError
from ..models.patient import Patient, PatientStatus
from ..schemas.patient import (
    PatientCreate, PatientUpdate, PatientResponse, PatientStats, PatientListResponse
)
from .base import ScopedService
from .text import initials, matches

logger = logging.getLogger(__name__)

FOLLOW_UP_CONDITIONS = ("Diabetes", "Hypertension")


def patient_stats(patients: List[Patient]) -> PatientStats:
    return PatientStats(
        total=len(patients),
        active=sum(1 for p in patients if p.status == PatientStatus.ACTIVE.value),
        follow_up=sum(
            1 for p in patients
            if any(c in (p.conditions or []) for c in FOLLOW_UP_CONDITIONS)
        ),
    )


def filter_patients(patients: List[Patient], search: str) -> List[Patient]:
    """Client-side search over name, village and conditions."""
    return [
        p for p in patients
        if matches(search, p.full_name, p.village, extra=p.conditions or [])
    ]


class PatientService(ScopedService):
    """The doctor's patient database."""

    def list_patients(self) -> List[Patient]:
        with self.operation("Failed to load patients"):
            return self.db.query(Patient).filter(
                Patient.doctor_id == self.identity.id
            ).order_by(Patient.last_visit_date.desc()).all()

    def view(self, search: str = "", message: Optional[str] = None) -> PatientListResponse:
        patients = self.list_patients()
        shown = filter_patients(patients, search)
        return PatientListResponse(
            patients=[self._to_response(p) for p in shown],
            stats=patient_stats(patients),
            shown=len(shown),
            search=search,
            message=message,
        )

    def create_patient(self, form: PatientCreate) -> Patient:
        patient = Patient(
            doctor_id=self.identity.id,
            full_name=form.full_name,
            age=form.age,
            gender=form.gender,
            phone=form.phone,
            village=form.village,
            conditions=form.condition_list,
            notes=form.notes,
            status=PatientStatus.ACTIVE.value,
            total_visits=0,
        )
        with self.operation("Failed to create patient record"):
            self.db.add(patient)
            self.db.commit()

        logger.info(f"Doctor {self.identity.id} created patient {patient.id}")
        return patient

    def update_patient(self, patient_id: str, form: PatientUpdate) -> Patient:
        patient = self._get(patient_id)
        with self.operation("Failed to update patient record"):
            for field, value in form.changes().items():
                setattr(patient, field, value)
            self.db.commit()
        return patient

    def delete_patient(self, patient_id: str) -> None:
        patient = self._get(patient_id)
        with self.operation("Failed to delete patient record"):
            self.db.delete(patient)
            self.db.commit()
        logger.info(f"Doctor {self.identity.id} deleted patient {patient_id}")

    def record_visit(self, patient_id: str, visit_date: Optional[date] = None) -> Patient:
        patient = self._get(patient_id)
        with self.operation("Failed to record visit"):
            patient.total_visits = (patient.total_visits or 0) + 1
            patient.last_visit_date = visit_date or date.today()
            self.db.commit()
        return patient

    def _get(self, patient_id: str) -> Patient:
        with self.operation("Failed to load patient record"):
            patient = self.db.query(Patient).filter(
                Patient.id == patient_id,
                Patient.doctor_id == self.identity.id
            ).first()
        if not patient:
            raise RecordNotFoundError("Patient not found")
        return patient

    @staticmethod
    def _to_response(patient: Patient) -> PatientResponse:
        response = PatientResponse.model_validate(patient)
        response.initials = initials(patient.full_name)
        response.conditions = list(patient.conditions or [])
        return response
