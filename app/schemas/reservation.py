"""
Pydantic schemas for reservations and reservation settings

Wire format is camelCase (timeSlot, defaultDuration, ...); snake_case input
is accepted as well.
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, List
from datetime import date as date_type, datetime
from uuid import UUID
import re

from app.models.reservation import ReservationStatus
from app.models.reservation_settings import WEEKDAYS

TIME_SLOT_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_time_string(value: str) -> str:
    """Check a zero-padded 24h "HH:MM" string"""
    if not isinstance(value, str) or not TIME_SLOT_PATTERN.match(value):
        raise ValueError("Time must be in zero-padded 24-hour HH:MM format")
    return value


def coerce_calendar_date(value):
    """Accept "YYYY-MM-DD" or a full ISO timestamp and keep only the day"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        from_attributes=True,
    )


# ============================================================================
# Settings
# ============================================================================

class DayHours(CamelModel):
    """Opening hours for one weekday"""
    enabled: bool = False
    open: str = "09:00"
    close: str = "17:00"

    @field_validator("open", "close")
    @classmethod
    def validate_time(cls, v):
        return validate_time_string(v)

    @model_validator(mode="after")
    def check_open_before_close(self):
        if self.enabled and self.open >= self.close:
            raise ValueError("Opening time must be earlier than closing time")
        return self


def validate_weekday_keys(value):
    if value is None:
        return value
    unknown = set(value) - set(WEEKDAYS)
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")
    return value


class ReservationSettingsUpdate(CamelModel):
    """
    Partial or full settings update.
    Only fields present in the request are applied; business hours merge per weekday.
    """
    business_hours: Optional[Dict[str, Dict]] = None
    default_duration: Optional[int] = Field(None, ge=1, description="Minutes per appointment")
    buffer_time: Optional[int] = Field(None, ge=0, description="Minutes between slots")
    max_advance_days: Optional[int] = Field(None, ge=1)
    allowed_services: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("business_hours")
    @classmethod
    def validate_business_hours(cls, v):
        return validate_weekday_keys(v)

    @field_validator("allowed_services")
    @classmethod
    def strip_services(cls, v):
        if v is None:
            return v
        return [service.strip() for service in v if service and service.strip()]


class ReservationSettingsResponse(CamelModel):
    id: UUID
    business_hours: Dict[str, DayHours]
    default_duration: int
    buffer_time: int
    max_advance_days: int
    allowed_services: List[str]
    is_active: bool
    updated_at: Optional[datetime] = None


# ============================================================================
# Reservations
# ============================================================================

class ReservationCreate(CamelModel):
    """Public booking request; status and duration are honoured for staff only"""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    service: Optional[str] = Field(None, max_length=200)
    date: date_type
    time_slot: str
    notes: Optional[str] = None
    status: Optional[ReservationStatus] = None
    duration: Optional[int] = Field(None, ge=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ana López",
                "email": "ana@example.com",
                "phone": "+52 55 1234 5678",
                "service": "Consulta general",
                "date": "2025-03-10",
                "timeSlot": "10:15",
                "notes": "First visit",
            }
        }
    )

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return coerce_calendar_date(v)

    @field_validator("time_slot")
    @classmethod
    def validate_time_slot(cls, v):
        return validate_time_string(v)


class ReservationUpdate(CamelModel):
    """Staff update; anything outside these fields is ignored"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    service: Optional[str] = Field(None, max_length=200)
    date: Optional[date_type] = None
    time_slot: Optional[str] = None
    status: Optional[ReservationStatus] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return coerce_calendar_date(v)

    @field_validator("time_slot")
    @classmethod
    def validate_time_slot(cls, v):
        if v is None:
            return v
        return validate_time_string(v)


class ReservationResponse(CamelModel):
    id: UUID
    user_id: Optional[UUID] = None
    name: str
    email: str
    phone: Optional[str] = None
    service: Optional[str] = None
    date: date_type
    time_slot: str
    notes: Optional[str] = None
    status: str
    duration: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================================
# Availability
# ============================================================================

class OpeningWindow(CamelModel):
    open: str
    close: str


class AvailableSlotsResponse(CamelModel):
    available_slots: List[str]
    business_hours: Optional[OpeningWindow] = None


class MessageResponse(BaseModel):
    """Generic message response."""
    message: str
