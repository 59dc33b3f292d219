"""Blocked time slot schemas"""

from datetime import date, datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel

from tablebook.schemas.common import ClockTime, EndTime, StartTime


class BlockCreate(BaseModel):
    """Block a time range, restaurant-wide or for specific tables"""
    date: date
    start_time: StartTime
    end_time: EndTime
    reason: str
    table_ids: List[UUID] = []
    created_by: str


class BlockResponse(BaseModel):
    """Blocked slot response"""
    id: UUID
    restaurant_id: UUID
    date: date
    start_time: ClockTime
    end_time: ClockTime
    reason: str
    table_ids: List[UUID]
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True
