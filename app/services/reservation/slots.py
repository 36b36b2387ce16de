# ============================================================================
# app/services/reservation/slots.py
# ============================================================================
"""Slot arithmetic shared by availability and booking validation"""
from typing import List
from datetime import date, datetime, time, timedelta

from app.services.reservation.exceptions import ConfigurationError

# Slot arithmetic happens on one fixed day; only the time of day matters
REFERENCE_DAY = date(2000, 1, 1)


def parse_clock(value: str) -> time:
    """Parse "HH:MM" into a time of day"""
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid business hours time: {value!r}")


def generate_time_slots(
        open_time: str,
        close_time: str,
        duration_minutes: int,
        buffer_minutes: int
) -> List[str]:
    """
    Candidate start times from opening until closing.

    The cursor advances by duration + buffer and stops once it reaches closing
    time. Only the start has to precede closing; the last appointment may run
    past it.
    """
    step = (duration_minutes or 0) + (buffer_minutes or 0)
    if step <= 0:
        raise ConfigurationError("Appointment duration plus buffer must be positive")

    current_slot = datetime.combine(REFERENCE_DAY, parse_clock(open_time))
    day_end = datetime.combine(REFERENCE_DAY, parse_clock(close_time))

    slots = []
    while current_slot < day_end:
        slots.append(current_slot.strftime("%H:%M"))
        current_slot += timedelta(minutes=step)

    return slots


def slots_for_day(settings, day: date) -> List[str]:
    """Every slot the settings offer on a date; empty when the day is closed"""
    window = settings.opening_window(day)
    if window is None:
        return []
    return generate_time_slots(
        window["open"],
        window["close"],
        settings.default_duration,
        settings.buffer_time,
    )
