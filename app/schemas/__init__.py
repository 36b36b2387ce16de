# app/schemas/__init__.py
from .reservation import (
    DayHours,
    ReservationSettingsUpdate,
    ReservationSettingsResponse,
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    OpeningWindow,
    AvailableSlotsResponse,
    MessageResponse
)
