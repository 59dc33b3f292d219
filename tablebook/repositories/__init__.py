"""Store interfaces and in-memory implementations"""

from tablebook.repositories.base import (
    BaseRestaurantRepository,
    BaseTableRepository,
    BaseReservationRepository,
    BaseBlockRepository,
    BaseWaitlistRepository,
)
from tablebook.repositories.restaurants import InMemoryRestaurantRepository, InMemoryTableRepository
from tablebook.repositories.reservations import InMemoryReservationRepository
from tablebook.repositories.blocks import InMemoryBlockRepository
from tablebook.repositories.waitlist import InMemoryWaitlistRepository

__all__ = [
    "BaseRestaurantRepository",
    "BaseTableRepository",
    "BaseReservationRepository",
    "BaseBlockRepository",
    "BaseWaitlistRepository",
    "InMemoryRestaurantRepository",
    "InMemoryTableRepository",
    "InMemoryReservationRepository",
    "InMemoryBlockRepository",
    "InMemoryWaitlistRepository",
]
