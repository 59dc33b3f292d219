"""Domain models"""

from tablebook.models.restaurant import Restaurant, OpeningHours, Table, TableStatus, TableZone
from tablebook.models.reservation import Reservation, ReservationStatus, PaymentStatus
from tablebook.models.block import BlockedSlot
from tablebook.models.waitlist import WaitlistEntry

__all__ = [
    "Restaurant",
    "OpeningHours",
    "Table",
    "TableStatus",
    "TableZone",
    "Reservation",
    "ReservationStatus",
    "PaymentStatus",
    "BlockedSlot",
    "WaitlistEntry",
]
