# ============================================================================
# app/services/reservation/reservation_service.py
# ============================================================================
"""Reservation ledger: the authoritative store of bookings"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.reservation import Reservation, ReservationStatus, ACTIVE_STATUSES
from app.models.reservation_settings import weekday_name
from app.schemas.reservation import ReservationCreate, ReservationUpdate
from app.services.reservation.exceptions import (
    DayClosedError,
    NotFoundError,
    SlotConflictError,
    ValidationError,
    describe_validation_error,
)
from app.services.reservation.settings_service import ReservationSettingsService
from app.services.reservation.slots import slots_for_day

logger = logging.getLogger(__name__)

# Fields staff may change; anything else in an update is dropped
UPDATABLE_FIELDS = ("name", "email", "phone", "service", "date", "time_slot", "status", "notes")

# Columns that cannot be cleared by an update
REQUIRED_FIELDS = ("name", "email", "date", "time_slot", "status")

FIELD_ALIASES = {"timeSlot": "time_slot"}


class ReservationService:
    """Handles reservation operations"""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def list_for_date(db: Session, day: date) -> List[Reservation]:
        """Reservations holding a slot on the given day, ordered by time slot"""
        return db.query(Reservation).filter(
            Reservation.date == day,
            Reservation.status.in_(ACTIVE_STATUSES)
        ).order_by(Reservation.time_slot).all()

    @staticmethod
    def list_all(db: Session) -> List[Reservation]:
        return db.query(Reservation).order_by(Reservation.created_at.desc()).all()

    @staticmethod
    def list_for_user(db: Session, user_id: UUID) -> List[Reservation]:
        return db.query(Reservation).filter(
            Reservation.user_id == user_id
        ).order_by(Reservation.created_at.desc()).all()

    @staticmethod
    def get(db: Session, reservation_id: Union[str, UUID]) -> Reservation:
        reservation = ReservationService._find(db, reservation_id)
        if reservation is None:
            raise NotFoundError()
        return reservation

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @staticmethod
    def create(
            db: Session,
            data: Union[ReservationCreate, Dict[str, Any]],
            user_id: Optional[UUID] = None
    ) -> Reservation:
        """
        Book a slot.

        Raises DayClosedError when the weekday is disabled, ValidationError when
        the slot is not one the settings generate, and SlotConflictError
        when an active reservation already holds the (date, time_slot). The
        unique index on the table catches writers that race past the check.
        """
        payload = ReservationService._parse(ReservationCreate, data)

        settings = ReservationSettingsService.get_settings(db)

        ReservationService._check_bookable(settings, payload.date, payload.time_slot)

        if ReservationService._slot_taken(db, payload.date, payload.time_slot):
            logger.info(f"Rejected booking for taken slot {payload.date} {payload.time_slot}")
            raise SlotConflictError()

        status = payload.status.value if payload.status else ReservationStatus.PENDING.value

        reservation = Reservation(
            user_id=user_id,
            name=payload.name.strip(),
            email=str(payload.email).lower().strip(),
            phone=payload.phone,
            service=payload.service,
            date=payload.date,
            time_slot=payload.time_slot,
            notes=payload.notes,
            status=status,
            duration=payload.duration or settings.default_duration,
        )

        db.add(reservation)
        ReservationService._commit_slot_change(db, payload.date, payload.time_slot)
        db.refresh(reservation)

        logger.info(f"Created reservation {reservation.id} for {reservation.date} {reservation.time_slot}")
        return reservation

    @staticmethod
    def update(
            db: Session,
            reservation_id: Union[str, UUID],
            fields: Dict[str, Any]
    ) -> Reservation:
        """
        Apply allow-listed fields only; ids, timestamps and user links in the
        input are ignored rather than rejected.
        """
        reservation = ReservationService.get(db, reservation_id)

        allowed = {}
        for key, value in (fields or {}).items():
            key = FIELD_ALIASES.get(key, key)
            if key in UPDATABLE_FIELDS:
                allowed[key] = value

        payload = ReservationService._parse(ReservationUpdate, allowed)
        changes = payload.model_dump(exclude_unset=True)
        changes = {
            key: value for key, value in changes.items()
            if value is not None or key not in REQUIRED_FIELDS
        }
        if "status" in changes:
            changes["status"] = ReservationStatus(changes["status"]).value
        if "email" in changes and changes["email"]:
            changes["email"] = str(changes["email"]).lower().strip()

        new_date = changes.get("date", reservation.date)
        new_slot = changes.get("time_slot", reservation.time_slot)
        new_status = changes.get("status", reservation.status)

        slot_moved = (new_date, new_slot) != (reservation.date, reservation.time_slot)
        if slot_moved:
            settings = ReservationSettingsService.get_settings(db)
            ReservationService._check_bookable(settings, new_date, new_slot)

        reactivated = new_status in ACTIVE_STATUSES and not reservation.is_active
        if new_status in ACTIVE_STATUSES and (slot_moved or reactivated):
            if ReservationService._slot_taken(db, new_date, new_slot, exclude_id=reservation.id):
                raise SlotConflictError()

        for key, value in changes.items():
            setattr(reservation, key, value)

        ReservationService._commit_slot_change(db, new_date, new_slot)
        db.refresh(reservation)

        logger.info(f"Updated reservation {reservation.id}: {sorted(changes)}")
        return reservation

    @staticmethod
    def delete(db: Session, reservation_id: Union[str, UUID]) -> bool:
        """Hard delete. Returns False if nothing was removed."""
        reservation = ReservationService._find(db, reservation_id)
        if reservation is None:
            return False

        db.delete(reservation)
        db.commit()

        logger.info(f"Deleted reservation {reservation_id}")
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _find(db: Session, reservation_id: Union[str, UUID]) -> Optional[Reservation]:
        if not isinstance(reservation_id, UUID):
            try:
                reservation_id = UUID(str(reservation_id))
            except ValueError:
                return None
        return db.query(Reservation).filter(Reservation.id == reservation_id).first()

    @staticmethod
    def _check_bookable(settings, day: date, time_slot: str) -> None:
        """Raise unless the day is open and the slot is one the settings generate"""
        if settings.opening_window(day) is None:
            logger.info(f"Rejected booking on closed day {day} ({weekday_name(day)})")
            raise DayClosedError()

        if time_slot not in slots_for_day(settings, day):
            logger.info(f"Rejected booking for {day} {time_slot}: not a generated slot")
            raise ValidationError("Time slot not offered on this day")

    @staticmethod
    def _slot_taken(
            db: Session,
            day: date,
            time_slot: str,
            exclude_id: Optional[UUID] = None
    ) -> bool:
        query = db.query(Reservation.id).filter(
            Reservation.date == day,
            Reservation.time_slot == time_slot,
            Reservation.status.in_(ACTIVE_STATUSES)
        )
        if exclude_id is not None:
            query = query.filter(Reservation.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def _commit_slot_change(db: Session, day: date, time_slot: str) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Slot {day} {time_slot} taken by a concurrent booking: {e.orig}")
            raise SlotConflictError()

    @staticmethod
    def _parse(schema, data):
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e))
