"""Pydantic schemas for request/response validation"""

from tablebook.schemas.availability import (
    TimeSlot,
    AvailabilityCalendar,
    AvailableSlot,
    BestTableResponse,
)
from tablebook.schemas.restaurant import (
    OpeningHoursSchema,
    TableCreate,
    TableResponse,
    TableStatusUpdate,
    RestaurantCreate,
    RestaurantResponse,
)
from tablebook.schemas.reservation import (
    ReservationCreate,
    ReservationStatusUpdate,
    PaymentUpdate,
    CheckoutRequest,
    ReservationResponse,
    ReservationListResponse,
)
from tablebook.schemas.block import BlockCreate, BlockResponse
from tablebook.schemas.waitlist import WaitlistCreate, WaitlistResponse

__all__ = [
    "TimeSlot",
    "AvailabilityCalendar",
    "AvailableSlot",
    "BestTableResponse",
    "OpeningHoursSchema",
    "TableCreate",
    "TableResponse",
    "TableStatusUpdate",
    "RestaurantCreate",
    "RestaurantResponse",
    "ReservationCreate",
    "ReservationStatusUpdate",
    "PaymentUpdate",
    "CheckoutRequest",
    "ReservationResponse",
    "ReservationListResponse",
    "BlockCreate",
    "BlockResponse",
    "WaitlistCreate",
    "WaitlistResponse",
]
