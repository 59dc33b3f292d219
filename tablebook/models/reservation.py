"""Reservation model"""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


# Allowed forward moves; anything not listed is rejected
ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {
        ReservationStatus.SEATED,
        ReservationStatus.NO_SHOW,
        ReservationStatus.CANCELLED,
    },
    ReservationStatus.SEATED: {ReservationStatus.COMPLETED},
}

# States in which a reservation no longer holds its table
RELEASED_STATUSES = frozenset({
    ReservationStatus.CANCELLED,
    ReservationStatus.NO_SHOW,
    ReservationStatus.COMPLETED,
})


@dataclass
class Reservation:
    """Table reservation"""
    restaurant_id: uuid.UUID
    table_id: uuid.UUID

    # Customer information
    customer_name: str
    customer_id: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    # Reservation details
    date: date = field(default_factory=date.today)
    time: int = 0  # minutes since midnight
    duration_minutes: int = 120
    party_size: int = 1

    status: ReservationStatus = ReservationStatus.PENDING
    special_requests: Optional[str] = None

    # Payment (recorded, never computed here)
    payment_ref: Optional[str] = None
    payment_amount: Optional[float] = None
    payment_status: Optional[PaymentStatus] = None

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def end_time(self) -> int:
        return self.time + self.duration_minutes

    @property
    def holds_table(self) -> bool:
        """True while the reservation occupies its table interval"""
        return self.status not in RELEASED_STATUSES

    def can_transition_to(self, new_status: ReservationStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS.get(self.status, set())

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
