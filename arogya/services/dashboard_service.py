from datetime import datetime
from typing import Optional

from sqlalchemy import func

from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import Doctor
from ..models.patient import Patient
from ..schemas.appointment import DashboardResponse, TodayStats
from .base import ScopedService
from .scheduling import count_status, greeting, long_date
from .text import surname


class DashboardService(ScopedService):

    def view(self, now: Optional[datetime] = None) -> DashboardResponse:
        now = now or datetime.now()
        today = now.date()

        with self.operation("Failed to load dashboard"):
            doctor = self.db.query(Doctor).filter(Doctor.id == self.identity.id).first()

            todays = self.db.query(Appointment).filter(
                Appointment.doctor_id == self.identity.id,
                Appointment.appointment_date == today
            ).all()

            total_patients = self.db.query(func.count(Patient.id)).filter(
                Patient.doctor_id == self.identity.id
            ).scalar()

        return DashboardResponse(
            greeting=greeting(now),
            doctor_name=surname(doctor.full_name) if doctor else "Doctor",
            today=long_date(today),
            stats=today_stats(todays, total_patients or 0),
        )


def today_stats(todays, total_patients: int) -> TodayStats:
    """Booked rows are the day's appointments; pending is booked minus
    completed, which goes negative once completed rows outnumber booked ones."""
    booked = count_status(todays, AppointmentStatus.BOOKED)
    completed = count_status(todays, AppointmentStatus.COMPLETED)
    return TodayStats(
        total_appointments=booked,
        completed=completed,
        pending=booked - completed,
        total_patients=total_patients,
    )
