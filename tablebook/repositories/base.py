"""Repository interfaces for the engine's stores"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from tablebook.models import (
    BlockedSlot,
    Reservation,
    ReservationStatus,
    Restaurant,
    Table,
    TableStatus,
    WaitlistEntry,
)


class BaseRestaurantRepository(ABC):
    """Restaurant aggregates"""

    @abstractmethod
    def add(self, restaurant: Restaurant) -> Restaurant:
        pass

    @abstractmethod
    def get(self, restaurant_id: UUID) -> Optional[Restaurant]:
        pass

    @abstractmethod
    def list(self) -> List[Restaurant]:
        pass


class BaseTableRepository(ABC):
    """Table registry"""

    @abstractmethod
    def add(self, table: Table) -> Table:
        pass

    @abstractmethod
    def get(self, table_id: UUID) -> Optional[Table]:
        pass

    @abstractmethod
    def tables_of(self, restaurant_id: UUID) -> List[Table]:
        """Tables of a restaurant ordered by table number"""
        pass

    @abstractmethod
    def set_status(self, table_id: UUID, status: TableStatus) -> Optional[Table]:
        """Re-status a table; never cascades to reservations"""
        pass


class BaseReservationRepository(ABC):
    """Reservation store, the source of truth for occupancy"""

    @abstractmethod
    def add(self, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    def get(self, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    def for_restaurant(
        self,
        restaurant_id: UUID,
        on_date: Optional[date] = None,
        status: Optional[ReservationStatus] = None,
    ) -> List[Reservation]:
        pass

    @abstractmethod
    def for_table(self, table_id: UUID, on_date: date) -> List[Reservation]:
        pass


class BaseBlockRepository(ABC):
    """Manually blocked time ranges"""

    @abstractmethod
    def add(self, block: BlockedSlot) -> BlockedSlot:
        pass

    @abstractmethod
    def get(self, block_id: UUID) -> Optional[BlockedSlot]:
        pass

    @abstractmethod
    def remove(self, block_id: UUID) -> Optional[BlockedSlot]:
        pass

    @abstractmethod
    def for_restaurant(self, restaurant_id: UUID, on_date: Optional[date] = None) -> List[BlockedSlot]:
        pass


class BaseWaitlistRepository(ABC):
    """Priority-ordered waitlist"""

    @abstractmethod
    def add(self, entry: WaitlistEntry) -> WaitlistEntry:
        """Store the entry, assigning the restaurant's next priority"""
        pass

    @abstractmethod
    def get(self, entry_id: UUID) -> Optional[WaitlistEntry]:
        pass

    @abstractmethod
    def remove(self, entry_id: UUID) -> Optional[WaitlistEntry]:
        pass

    @abstractmethod
    def for_restaurant(self, restaurant_id: UUID, on_date: Optional[date] = None) -> List[WaitlistEntry]:
        pass

    @abstractmethod
    def count(self, restaurant_id: UUID, on_date: date, time: int) -> int:
        pass
