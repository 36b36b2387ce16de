# ============================================================================
# app/services/reservation/settings_service.py
# ============================================================================
"""Singleton reservation settings: lazy defaults and partial updates"""
import copy
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.reservation_settings import (
    ReservationSettings,
    SINGLETON_KEY,
    WEEKDAYS,
    default_settings,
)
from app.schemas.reservation import DayHours, ReservationSettingsUpdate
from app.services.reservation.exceptions import (
    ConfigurationError,
    ValidationError,
    describe_validation_error,
)

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = (
    "business_hours",
    "default_duration",
    "buffer_time",
    "max_advance_days",
    "allowed_services",
    "is_active",
)


class ReservationSettingsService:
    """Reads and writes the single authoritative settings row"""

    @staticmethod
    def _find(db: Session) -> Optional[ReservationSettings]:
        return db.query(ReservationSettings).filter_by(singleton_key=SINGLETON_KEY).first()

    @staticmethod
    def get_settings(db: Session) -> ReservationSettings:
        """
        Return the settings row, creating it with defaults on first access.
        Safe to call concurrently: the unique singleton_key lets only one insert win.
        """
        settings = ReservationSettingsService._find(db)
        if settings:
            return settings

        return ReservationSettingsService._insert(db, default_settings())

    @staticmethod
    def update_settings(db: Session, updates: Dict[str, Any]) -> ReservationSettings:
        """
        Merge a partial update over the current settings (or over the defaults
        when no row exists yet) and persist it.
        """
        changes = ReservationSettingsService._validate(updates)

        settings = ReservationSettingsService._find(db)
        if settings is None:
            values = ReservationSettingsService._merge(default_settings(), changes)
            created = ReservationSettingsService._insert(db, values)
            if ReservationSettingsService._values_of(created) == values:
                return created
            # Lost the race to another writer; apply our changes over theirs
            settings = created

        values = ReservationSettingsService._merge(
            ReservationSettingsService._values_of(settings), changes
        )
        for field, value in values.items():
            setattr(settings, field, value)

        db.commit()
        db.refresh(settings)

        logger.info(f"Updated reservation settings {settings.id}: {sorted(changes)}")
        return settings

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _insert(db: Session, values: Dict[str, Any]) -> ReservationSettings:
        settings = ReservationSettings(singleton_key=SINGLETON_KEY, **values)
        db.add(settings)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            existing = ReservationSettingsService._find(db)
            if existing is None:
                raise ConfigurationError()
            logger.info("Reservation settings were created concurrently, using existing row")
            return existing

        db.refresh(settings)
        logger.info(f"Created reservation settings {settings.id}")
        return settings

    @staticmethod
    def _validate(updates: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = ReservationSettingsUpdate.model_validate(updates or {})
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e))

        return {
            field: value
            for field, value in payload.model_dump(exclude_unset=True).items()
            if value is not None
        }

    @staticmethod
    def _values_of(settings: ReservationSettings) -> Dict[str, Any]:
        return {field: copy.deepcopy(getattr(settings, field)) for field in SETTINGS_FIELDS}

    @staticmethod
    def _merge(current: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
        merged = copy.deepcopy(current)

        for field, value in changes.items():
            if field != "business_hours":
                merged[field] = value
                continue

            hours = dict(merged.get("business_hours") or {})
            for day in WEEKDAYS:
                if day not in value:
                    continue
                day_hours = {**(hours.get(day) or {}), **(value[day] or {})}
                try:
                    hours[day] = DayHours.model_validate(day_hours).model_dump()
                except PydanticValidationError as e:
                    raise ValidationError(f"{day}: {describe_validation_error(e)}")
            merged["business_hours"] = hours

        return merged

