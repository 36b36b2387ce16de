# ===== app/models/reservation.py =====
from sqlalchemy import Column, String, Integer, Text, Date, DateTime, ForeignKey, Index, Uuid, text
from sqlalchemy.sql import func
from .base import Base
import enum
import uuid


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that still hold their (date, time_slot)
ACTIVE_STATUSES = (
    ReservationStatus.PENDING.value,
    ReservationStatus.CONFIRMED.value,
    ReservationStatus.COMPLETED.value,
)


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Customer info
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)

    # Reservation details
    service = Column(String(200), nullable=True)
    date = Column(Date, nullable=False, index=True)
    time_slot = Column(String(5), nullable=False)  # "HH:MM"
    duration = Column(Integer, nullable=False, default=60)
    notes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=ReservationStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        # One active booking per slot; cancelled rows release it
        Index(
            "uq_reservations_active_slot",
            "date",
            "time_slot",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def __repr__(self):
        return f"<Reservation(id={self.id}, date={self.date}, time_slot={self.time_slot}, status={self.status})>"
