"""Availability schemas"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from tablebook.schemas.common import ClockTime


class TimeSlot(BaseModel):
    """Availability of one slot"""
    time: ClockTime
    available: bool
    table_ids: List[UUID] = []
    capacity: int = 0
    waitlist_count: int = 0


class AvailabilityCalendar(BaseModel):
    """Full-day availability"""
    date: date
    slots: List[TimeSlot]
    total_capacity: int
    booked_capacity: int
    available_capacity: int


class AvailableSlot(BaseModel):
    """Bookable slot for a party with the table it would get"""
    time: ClockTime
    table_id: UUID
    table_number: int
    capacity: int


class BestTableResponse(BaseModel):
    """Best-fit table lookup result"""
    table_id: Optional[UUID] = None
    table_number: Optional[int] = None
    capacity: Optional[int] = None
