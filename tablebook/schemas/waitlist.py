"""Waitlist schemas"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from tablebook.schemas.common import ClockTime, StartTime


class WaitlistCreate(BaseModel):
    """Join the waitlist for a full slot"""
    date: date
    time: StartTime
    party_size: int = Field(gt=0)
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None


class WaitlistResponse(BaseModel):
    """Waitlist entry response"""
    id: UUID
    restaurant_id: UUID
    date: date
    time: ClockTime
    party_size: int
    customer_name: str
    customer_email: Optional[str]
    customer_phone: Optional[str]
    priority: int
    notified: bool
    created_at: datetime

    class Config:
        from_attributes = True
