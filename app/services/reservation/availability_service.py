# ===== app/services/reservation/availability_service.py =====
from typing import Dict
from datetime import date
from sqlalchemy.orm import Session
from app.models.reservation_settings import weekday_name
from app.services.reservation.reservation_service import ReservationService
from app.services.reservation.settings_service import ReservationSettingsService
from app.services.reservation.slots import slots_for_day
import logging

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Free slots for a date from business hours and the reservation ledger"""

    @staticmethod
    def get_available_slots(db: Session, day: date) -> Dict:
        """
        Returns {"available_slots": [...], "business_hours": {"open", "close"} | None}.
        A closed weekday yields no slots regardless of existing bookings.
        """
        settings = ReservationSettingsService.get_settings(db)

        window = settings.opening_window(day)
        if window is None:
            logger.debug(f"{day} ({weekday_name(day)}) is closed")
            return {"available_slots": [], "business_hours": None}

        candidates = slots_for_day(settings, day)

        booked = {r.time_slot for r in ReservationService.list_for_date(db, day)}
        available = [slot for slot in candidates if slot not in booked]

        logger.debug(
            f"Availability for {day}: {len(available)}/{len(candidates)} slots free"
        )
        return {"available_slots": available, "business_hours": window}
