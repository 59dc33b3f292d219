"""
Availability engine.

Answers "can this party sit at this time, and where" from the restaurant's
tables, reservations, blocks and waitlist. Every public query runs inside
the restaurant's exclusive section so the stores are read as one snapshot.
"""

from datetime import date
from typing import List, Optional, Union
from uuid import UUID

import structlog

from tablebook.config import Settings, settings as default_settings
from tablebook.core.errors import NotFound
from tablebook.core.timeslots import generate_slots, to_minutes
from tablebook.models import Restaurant, Table, TableStatus
from tablebook.repositories import (
    BaseBlockRepository,
    BaseReservationRepository,
    BaseRestaurantRepository,
    BaseTableRepository,
    BaseWaitlistRepository,
)
from tablebook.schemas.availability import AvailabilityCalendar, AvailableSlot, TimeSlot
from tablebook.services.locks import RestaurantLocks

logger = structlog.get_logger()

TimeOfDay = Union[int, str]


def _minutes(value: TimeOfDay) -> int:
    return to_minutes(value) if isinstance(value, str) else value


def intervals_overlap(start: int, end: int, other_start: int, other_end: int) -> bool:
    """Half-open intervals [start, end) and [other_start, other_end) intersect"""
    return start < other_end and end > other_start


class AvailabilityEngine:
    """Per-slot availability, best-fit table search and day calendars"""

    def __init__(
        self,
        restaurants: BaseRestaurantRepository,
        tables: BaseTableRepository,
        reservations: BaseReservationRepository,
        blocks: BaseBlockRepository,
        waitlist: BaseWaitlistRepository,
        locks: RestaurantLocks,
        settings: Optional[Settings] = None,
    ):
        self.restaurants = restaurants
        self.tables = tables
        self.reservations = reservations
        self.blocks = blocks
        self.waitlist = waitlist
        self.locks = locks
        self.settings = settings or default_settings

    @property
    def dining_duration(self) -> int:
        return self.settings.default_dining_minutes

    def get_restaurant(self, restaurant_id: UUID) -> Restaurant:
        restaurant = self.restaurants.get(restaurant_id)
        if restaurant is None:
            raise NotFound("Restaurant", restaurant_id)
        return restaurant

    # ------------------------------------------------------------------
    # Building blocks (callers hold the restaurant lock)
    # ------------------------------------------------------------------

    def generate_slots(self, restaurant: Restaurant, on_date: date) -> List[int]:
        return generate_slots(
            restaurant,
            on_date,
            granularity=self.settings.slot_granularity_minutes,
            dining_duration=self.dining_duration,
            default_open=self.settings.default_opening_time,
            default_close=self.settings.default_closing_time,
        )

    def is_table_booked(
        self,
        table: Table,
        on_date: date,
        time: TimeOfDay,
        duration: Optional[int] = None,
    ) -> bool:
        """
        Whether a table cannot take a sitting starting at ``time``.

        Tables under maintenance are always unavailable. Otherwise the
        candidate interval [time, time + duration) is tested against every
        reservation on that table and date that still holds the table.
        """
        if table.status == TableStatus.MAINTENANCE:
            return True

        start = _minutes(time)
        end = start + (duration or self.dining_duration)

        return any(
            intervals_overlap(start, end, existing.time, existing.end_time)
            for existing in self.reservations.for_table(table.id, on_date)
            if existing.holds_table
        )

    def is_blocked(
        self,
        restaurant_id: UUID,
        on_date: date,
        time: TimeOfDay,
        table_id: Optional[UUID] = None,
    ) -> bool:
        """
        Whether a block covers ``time``.

        Without ``table_id`` only restaurant-wide blocks count. With it, a
        block listing that table counts as well.
        """
        minute = _minutes(time)
        for block in self.blocks.for_restaurant(restaurant_id, on_date):
            if not block.covers(minute):
                continue
            if block.restaurant_wide:
                return True
            if table_id is not None and table_id in block.table_ids:
                return True
        return False

    def is_blocked_during(
        self,
        restaurant_id: UUID,
        on_date: date,
        start: int,
        end: int,
        table_id: Optional[UUID] = None,
    ) -> bool:
        """Whether a block intersects the whole sitting [start, end), not just its first minute"""
        for block in self.blocks.for_restaurant(restaurant_id, on_date):
            if not block.overlaps(start, end):
                continue
            if block.restaurant_wide:
                return True
            if table_id is not None and table_id in block.table_ids:
                return True
        return False

    def _check_slot(self, restaurant_id: UUID, on_date: date, minute: int) -> TimeSlot:
        waitlist_count = self.waitlist.count(restaurant_id, on_date, minute)

        if self.is_blocked(restaurant_id, on_date, minute):
            return TimeSlot(
                time=minute,
                available=False,
                table_ids=[],
                capacity=0,
                waitlist_count=waitlist_count,
            )

        candidates = [
            table
            for table in self.tables.tables_of(restaurant_id)
            if not self.is_table_booked(table, on_date, minute)
            and not self.is_blocked(restaurant_id, on_date, minute, table.id)
        ]

        return TimeSlot(
            time=minute,
            available=bool(candidates),
            table_ids=[t.id for t in candidates],
            capacity=sum(t.capacity for t in candidates),
            waitlist_count=waitlist_count,
        )

    def _find_best_table(
        self,
        restaurant_id: UUID,
        on_date: date,
        minute: int,
        party_size: int,
        duration: Optional[int] = None,
        whole_sitting: bool = False,
    ) -> Optional[Table]:
        end = minute + (duration or self.dining_duration)

        def blocked(table_id: Optional[UUID] = None) -> bool:
            if whole_sitting:
                return self.is_blocked_during(restaurant_id, on_date, minute, end, table_id)
            return self.is_blocked(restaurant_id, on_date, minute, table_id)

        if blocked():
            return None

        suitable = [
            table
            for table in self.tables.tables_of(restaurant_id)
            if table.capacity >= party_size
            and not self.is_table_booked(table, on_date, minute, duration)
            and not blocked(table.id)
        ]
        if not suitable:
            return None

        # Smallest table that still fits; lowest number breaks ties
        return min(suitable, key=lambda t: (t.capacity, t.number))

    # ------------------------------------------------------------------
    # Public queries
    # ------------------------------------------------------------------

    def check_slot_availability(self, restaurant_id: UUID, on_date: date, time: TimeOfDay) -> TimeSlot:
        """Free tables and capacity at one time of day"""
        minute = _minutes(time)
        with self.locks.hold(restaurant_id):
            self.get_restaurant(restaurant_id)
            return self._check_slot(restaurant_id, on_date, minute)

    def build_calendar(self, restaurant_id: UUID, on_date: date) -> AvailabilityCalendar:
        """
        Availability for every slot of the day.

        ``booked_capacity`` sums each slot's shortfall against the total
        seat count, so it is a seat-slot figure rather than concurrent
        occupancy and can exceed ``total_capacity`` on busy days.
        """
        with self.locks.hold(restaurant_id):
            restaurant = self.get_restaurant(restaurant_id)
            slots = [
                self._check_slot(restaurant_id, on_date, minute)
                for minute in self.generate_slots(restaurant, on_date)
            ]
            total_capacity = sum(t.capacity for t in self.tables.tables_of(restaurant_id))

        booked_capacity = sum(
            total_capacity - (slot.capacity if slot.available else 0)
            for slot in slots
        )

        logger.debug(
            "Built availability calendar",
            restaurant_id=str(restaurant_id),
            date=on_date.isoformat(),
            slots=len(slots),
        )

        return AvailabilityCalendar(
            date=on_date,
            slots=slots,
            total_capacity=total_capacity,
            booked_capacity=booked_capacity,
            available_capacity=total_capacity - booked_capacity,
        )

    def find_best_table(
        self,
        restaurant_id: UUID,
        on_date: date,
        time: TimeOfDay,
        party_size: int,
        duration: Optional[int] = None,
        whole_sitting: bool = False,
    ) -> Optional[Table]:
        """
        Best-fit free table for the party, or None (caller may offer the waitlist).

        Blocks are matched at the start minute unless ``whole_sitting`` is
        set, in which case any block overlapping the sitting excludes a table.
        """
        minute = _minutes(time)
        with self.locks.hold(restaurant_id):
            self.get_restaurant(restaurant_id)
            return self._find_best_table(
                restaurant_id, on_date, minute, party_size, duration, whole_sitting
            )

    def available_slots(self, restaurant_id: UUID, on_date: date, party_size: int) -> List[AvailableSlot]:
        """Every slot of the day at which the party can be seated, with its table"""
        with self.locks.hold(restaurant_id):
            restaurant = self.get_restaurant(restaurant_id)
            result = []
            for minute in self.generate_slots(restaurant, on_date):
                table = self._find_best_table(restaurant_id, on_date, minute, party_size)
                if table is not None:
                    result.append(AvailableSlot(
                        time=minute,
                        table_id=table.id,
                        table_number=table.number,
                        capacity=table.capacity,
                    ))
            return result
