# app/models/__init__.py
from .base import Base
from .user import User, UserRole
from .reservation import Reservation, ReservationStatus, ACTIVE_STATUSES
from .reservation_settings import ReservationSettings

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Reservation",
    "ReservationStatus",
    "ACTIVE_STATUSES",
    "ReservationSettings",
]
