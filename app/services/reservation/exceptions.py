# ============================================================================
# app/services/reservation/exceptions.py
# ============================================================================
"""Errors raised by the reservation services and mapped to HTTP responses in app.main"""


class ReservationError(Exception):
    """Base class; `message` is safe to show to clients."""
    status_code = 400
    default_message = "Invalid reservation request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(ReservationError):
    """No reservation settings could be resolved."""
    default_message = "Reservation system not configured"


class DayClosedError(ReservationError):
    """Requested weekday is disabled in business hours."""
    default_message = "Service not available on this day"


class SlotConflictError(ReservationError):
    """Requested time slot is already held by an active reservation."""
    default_message = "Time slot not available"


class ValidationError(ReservationError):
    """Malformed input (bad date, bad time slot, bad status)."""
    default_message = "Invalid data"


class NotFoundError(ReservationError):
    """Unknown reservation id."""
    status_code = 404
    default_message = "Reservation not found"


def describe_validation_error(error) -> str:
    """First readable problem from a pydantic ValidationError"""
    details = error.errors()
    if not details:
        return ValidationError.default_message
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message
