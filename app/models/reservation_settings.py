# app/models/reservation_settings.py
"""
Reservation settings - a single row governs business hours and slot arithmetic
"""
from sqlalchemy import Column, String, Boolean, DateTime, Integer, JSON, Uuid
from sqlalchemy.sql import func
from datetime import date
from typing import Optional
import copy
import uuid
from app.models.base import Base

SINGLETON_KEY = "default"

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def weekday_name(day: date) -> str:
    """'monday' .. 'sunday' for the date's own calendar weekday"""
    return WEEKDAYS[day.weekday()]


DEFAULT_BUSINESS_HOURS = {
    day: {"enabled": day not in ("saturday", "sunday"), "open": "09:00", "close": "17:00"}
    for day in WEEKDAYS
}

DEFAULT_SETTINGS = {
    "business_hours": DEFAULT_BUSINESS_HOURS,
    "default_duration": 60,
    "buffer_time": 15,
    "max_advance_days": 30,
    "allowed_services": ["Consulta general", "Cita especializada", "Reunión"],
    "is_active": True,
}


def default_settings() -> dict:
    """Fresh copy of the defaults, safe to mutate"""
    return copy.deepcopy(DEFAULT_SETTINGS)


class ReservationSettings(Base):
    __tablename__ = "reservation_settings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Unique marker so a second row can never be inserted
    singleton_key = Column(String(20), nullable=False, unique=True, default=SINGLETON_KEY)

    business_hours = Column(JSON, nullable=False, default=lambda: copy.deepcopy(DEFAULT_BUSINESS_HOURS))
    default_duration = Column(Integer, nullable=False, default=60)  # minutes
    buffer_time = Column(Integer, nullable=False, default=15)  # minutes between slots
    max_advance_days = Column(Integer, nullable=False, default=30)
    allowed_services = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def hours_for(self, weekday: str) -> dict:
        """Business hours entry for a weekday name, or a closed day if missing"""
        return (self.business_hours or {}).get(weekday) or {"enabled": False}

    def opening_window(self, day: date) -> Optional[dict]:
        """{"open", "close"} for the date, or None when that weekday is closed"""
        day_hours = self.hours_for(weekday_name(day))
        if not day_hours.get("enabled"):
            return None
        return {"open": day_hours.get("open"), "close": day_hours.get("close")}

    def __repr__(self):
        return f"<ReservationSettings(id={self.id}, duration={self.default_duration}, buffer={self.buffer_time})>"
