from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from arogya.models.appointment import AppointmentStatus
from arogya.services.dashboard_service import today_stats
from arogya.services.scheduling import (
    BOOKING_TRANSITIONS, SCHEDULE_TRANSITIONS, can_transition, greeting, is_past,
    is_upcoming, long_date, schedule_action, slot_end_time
)

TODAY = date(2024, 6, 3)


def row(day: date, status: str):
    return SimpleNamespace(appointment_date=day, status=status)


@pytest.mark.parametrize("start, end", [
    (time(9, 0), time(9, 30)),
    (time(9, 45), time(10, 15)),
    (time(23, 45), time(0, 15)),
])
def test_slot_end_time(start, end):
    assert slot_end_time(start) == end


def test_upcoming_excludes_cancelled():
    assert is_upcoming(row(TODAY, "pending"), TODAY)
    assert not is_upcoming(row(date(2024, 6, 10), "cancelled"), TODAY)
    assert not is_upcoming(row(date(2024, 6, 1), "confirmed"), TODAY)


def test_past_includes_earlier_dates_and_completed():
    assert is_past(row(date(2024, 6, 1), "cancelled"), TODAY)
    assert not is_past(row(TODAY, "pending"), TODAY)


def test_future_completed_row_is_upcoming_and_past():
    completed = row(date(2024, 6, 10), "completed")
    assert is_upcoming(completed, TODAY)
    assert is_past(completed, TODAY)


def test_booking_transitions():
    assert can_transition(BOOKING_TRANSITIONS, "pending", "confirmed")
    assert can_transition(BOOKING_TRANSITIONS, "confirmed", "completed")
    assert not can_transition(BOOKING_TRANSITIONS, "completed", "pending")
    assert not can_transition(BOOKING_TRANSITIONS, "cancelled", "confirmed")
    assert not can_transition(BOOKING_TRANSITIONS, "pending", "available")


def test_schedule_transitions():
    assert can_transition(SCHEDULE_TRANSITIONS, "available", "blocked")
    assert can_transition(SCHEDULE_TRANSITIONS, "blocked", "available")
    assert can_transition(SCHEDULE_TRANSITIONS, "booked", "completed")
    assert not can_transition(SCHEDULE_TRANSITIONS, "blocked", "booked")
    assert not can_transition(SCHEDULE_TRANSITIONS, "unknown", "blocked")


def test_every_status_has_a_schedule_rule():
    for status in ("available", "blocked", "booked", "completed", "cancelled"):
        assert AppointmentStatus(status) in SCHEDULE_TRANSITIONS


def test_schedule_actions():
    assert schedule_action("available") == "Block"
    assert schedule_action("booked") == "Reschedule"
    assert schedule_action("blocked") == "Unblock"
    assert schedule_action("completed") is None


@pytest.mark.parametrize("hour, expected", [
    (6, "Good Morning"),
    (11, "Good Morning"),
    (12, "Good Afternoon"),
    (16, "Good Afternoon"),
    (17, "Good Evening"),
    (23, "Good Evening"),
])
def test_greeting(hour, expected):
    assert greeting(datetime(2024, 6, 3, hour, 0)) == expected


def test_long_date():
    assert long_date(TODAY) == "Monday, 3 June 2024"


def test_today_stats_counts_booked_rows():
    todays = [row(TODAY, "booked"), row(TODAY, "booked"), row(TODAY, "completed"), row(TODAY, "available")]
    stats = today_stats(todays, total_patients=7)
    assert stats.total_appointments == 2
    assert stats.completed == 1
    assert stats.pending == 1
    assert stats.total_patients == 7


def test_today_stats_pending_goes_negative():
    todays = [row(TODAY, "completed"), row(TODAY, "completed"), row(TODAY, "booked")]
    stats = today_stats(todays, total_patients=0)
    assert stats.total_appointments == 1
    assert stats.pending == -1
