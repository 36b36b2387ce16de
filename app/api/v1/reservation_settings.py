# ============================================================================
# FILE: app/api/v1/reservation_settings.py
# Business hours and slot configuration
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.config.database import get_db
from app.models.user import User
from app.api.dependencies import require_staff
from app.schemas.reservation import ReservationSettingsResponse, ReservationSettingsUpdate
from app.services.reservation.settings_service import ReservationSettingsService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reservation-settings", tags=["reservation-settings"])


@router.get("", response_model=ReservationSettingsResponse)
async def get_reservation_settings(db: Session = Depends(get_db)):
    """Current settings; defaults are created on first access. Public."""
    return ReservationSettingsService.get_settings(db)


@router.put("", response_model=ReservationSettingsResponse)
async def update_reservation_settings(
        settings_data: ReservationSettingsUpdate,
        current_user: User = Depends(require_staff),
        db: Session = Depends(get_db)
):
    """
    Update settings with a partial or full body. Staff only.
    Business hours merge per weekday, so sending one day leaves the others alone.
    """
    logger.info(f"User {current_user.username} updating reservation settings")
    return ReservationSettingsService.update_settings(
        db, settings_data.model_dump(exclude_unset=True)
    )
