"""In-memory reservation store"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from tablebook.models import Reservation, ReservationStatus
from tablebook.repositories.base import BaseReservationRepository


class InMemoryReservationRepository(BaseReservationRepository):
    """Reservations keyed by id, indexed by restaurant and by table"""

    def __init__(self):
        self._by_id: Dict[UUID, Reservation] = {}
        self._by_restaurant: Dict[UUID, List[UUID]] = defaultdict(list)
        self._by_table: Dict[UUID, List[UUID]] = defaultdict(list)

    def add(self, reservation: Reservation) -> Reservation:
        self._by_id[reservation.id] = reservation
        self._by_restaurant[reservation.restaurant_id].append(reservation.id)
        self._by_table[reservation.table_id].append(reservation.id)
        return reservation

    def get(self, reservation_id: UUID) -> Optional[Reservation]:
        return self._by_id.get(reservation_id)

    def for_restaurant(
        self,
        restaurant_id: UUID,
        on_date: Optional[date] = None,
        status: Optional[ReservationStatus] = None,
    ) -> List[Reservation]:
        reservations = [self._by_id[rid] for rid in self._by_restaurant.get(restaurant_id, [])]

        if on_date is not None:
            reservations = [r for r in reservations if r.date == on_date]

        if status is not None:
            reservations = [r for r in reservations if r.status == status]

        return sorted(reservations, key=lambda r: (r.date, r.time, r.created_at))

    def for_table(self, table_id: UUID, on_date: date) -> List[Reservation]:
        return [
            self._by_id[rid]
            for rid in self._by_table.get(table_id, [])
            if self._by_id[rid].date == on_date
        ]
