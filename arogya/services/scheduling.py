"""
Appointment lifecycle rules shared by the doctor schedule, patient
bookings and veterinary bookings.

Everything here is pure: no database access, no clock reads unless a
``today``/``now`` argument is omitted.
"""

from datetime import date, datetime, time, timedelta
from typing import Dict, FrozenSet, Iterable, Optional, Protocol

from ..core.config import settings
from ..models.appointment import AppointmentStatus

S = AppointmentStatus

# Patient and veterinary bookings
BOOKING_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    S.PENDING: frozenset({S.CONFIRMED, S.CANCELLED}),
    S.CONFIRMED: frozenset({S.COMPLETED, S.CANCELLED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
}

# Rows on a doctor's own schedule
SCHEDULE_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    S.AVAILABLE: frozenset({S.BLOCKED, S.BOOKED}),
    S.BLOCKED: frozenset({S.AVAILABLE}),
    S.BOOKED: frozenset({S.COMPLETED, S.CANCELLED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
}

SCHEDULE_ACTIONS = {
    S.AVAILABLE: "Block",
    S.BOOKED: "Reschedule",
    S.BLOCKED: "Unblock",
}


def can_transition(
    table: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]],
    current: str,
    target: str,
) -> bool:
    try:
        current_status = AppointmentStatus(current)
        target_status = AppointmentStatus(target)
    except ValueError:
        return False
    return target_status in table.get(current_status, frozenset())


def slot_end_time(start: time, minutes: Optional[int] = None) -> time:
    """End of a slot starting at ``start``; wraps past midnight."""
    minutes = settings.SLOT_MINUTES if minutes is None else minutes
    anchor = datetime.combine(date(2000, 1, 1), start.replace(second=0, microsecond=0))
    return (anchor + timedelta(minutes=minutes)).time()


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def schedule_action(status: str) -> Optional[str]:
    try:
        return SCHEDULE_ACTIONS.get(AppointmentStatus(status))
    except ValueError:
        return None


class Dated(Protocol):
    appointment_date: date
    status: str


def is_upcoming(appointment: Dated, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return (
        appointment.appointment_date >= today
        and appointment.status != AppointmentStatus.CANCELLED.value
    )


def is_past(appointment: Dated, today: Optional[date] = None) -> bool:
    # A future-dated row already marked completed is both upcoming and past.
    today = today or date.today()
    return (
        appointment.appointment_date < today
        or appointment.status == AppointmentStatus.COMPLETED.value
    )


def count_status(appointments: Iterable[Dated], status: AppointmentStatus) -> int:
    return sum(1 for a in appointments if a.status == status.value)


def greeting(now: Optional[datetime] = None) -> str:
    hour = (now or datetime.now()).hour
    if hour < 12:
        return "Good Morning"
    if hour < 17:
        return "Good Afternoon"
    return "Good Evening"


def long_date(value: date) -> str:
    """``Monday, 3 June 2024`` style date used on dashboard and schedule."""
    return f"{value.strftime('%A')}, {value.day} {value.strftime('%B %Y')}"
