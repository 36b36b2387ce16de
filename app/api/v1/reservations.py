# ============================================================================
# FILE: app/api/v1/reservations.py
# Public booking + staff reservation management - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
import logging

from app.config.database import get_db
from app.models.user import User
from app.api.dependencies import (
    STAFF_ROLES,
    get_current_active_user,
    optional_current_user,
    require_admin,
    require_staff,
)
from app.schemas.reservation import (
    AvailableSlotsResponse,
    MessageResponse,
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
)
from app.services.reservation.availability_service import AvailabilityService
from app.services.reservation.exceptions import NotFoundError
from app.services.reservation.reservation_service import ReservationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("/available-slots/{date}", response_model=AvailableSlotsResponse)
async def get_available_slots(
        date: date = Path(..., description="Calendar date, YYYY-MM-DD"),
        db: Session = Depends(get_db)
):
    """
    Free time slots for a date.
    Public endpoint; closed days return an empty list and null business hours.
    """
    return AvailabilityService.get_available_slots(db, date)


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
        reservation_data: ReservationCreate,
        current_user: Optional[User] = Depends(optional_current_user),
        db: Session = Depends(get_db)
):
    """
    Book a time slot.
    Public endpoint. Signed-in users get the reservation linked to their account;
    only staff may set status or duration directly.
    """
    is_staff = current_user is not None and current_user.has_role(*STAFF_ROLES)
    if not is_staff:
        reservation_data = reservation_data.model_copy(update={"status": None, "duration": None})

    return ReservationService.create(
        db=db,
        data=reservation_data,
        user_id=current_user.id if current_user else None
    )


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
        current_user: User = Depends(require_staff),
        db: Session = Depends(get_db)
):
    """All reservations, newest first. Staff only."""
    return ReservationService.list_all(db)


@router.get("/mine", response_model=List[ReservationResponse])
async def list_my_reservations(
        current_user: User = Depends(get_current_active_user),
        db: Session = Depends(get_db)
):
    """Reservations linked to the signed-in account."""
    return ReservationService.list_for_user(db, current_user.id)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
        reservation_id: str = Path(..., description="The reservation ID"),
        current_user: User = Depends(require_staff),
        db: Session = Depends(get_db)
):
    return ReservationService.get(db, reservation_id)


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
        updates: ReservationUpdate,
        reservation_id: str = Path(..., description="The reservation ID"),
        current_user: User = Depends(require_staff),
        db: Session = Depends(get_db)
):
    """
    Update a reservation. Staff only.
    Fields outside the editable set (id, createdAt, userId, ...) are ignored.
    """
    logger.info(f"User {current_user.username} updating reservation {reservation_id}")
    return ReservationService.update(
        db=db,
        reservation_id=reservation_id,
        fields=updates.model_dump(exclude_unset=True)
    )


@router.delete("/{reservation_id}", response_model=MessageResponse)
async def delete_reservation(
        reservation_id: str = Path(..., description="The reservation ID"),
        current_user: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """Hard delete a reservation. Admin only."""
    if not ReservationService.delete(db, reservation_id):
        raise NotFoundError()
    return {"message": "Reservation deleted successfully"}
