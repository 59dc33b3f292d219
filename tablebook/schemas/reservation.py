"""Reservation schemas"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from tablebook.models import PaymentStatus, ReservationStatus
from tablebook.schemas.common import ClockTime, StartTime


class ReservationCreate(BaseModel):
    """Create reservation request"""
    customer_name: str
    customer_id: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    date: date
    time: StartTime
    party_size: int = Field(gt=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    table_id: Optional[UUID] = None
    special_requests: Optional[str] = None
    payment_ref: Optional[str] = None


class ReservationStatusUpdate(BaseModel):
    """Reservation status change"""
    status: ReservationStatus


class PaymentUpdate(BaseModel):
    """Record the outcome of the external payment step"""
    payment_ref: str
    payment_amount: float = Field(ge=0)
    payment_status: PaymentStatus


class CheckoutRequest(BaseModel):
    """Reserve, pay, then confirm"""
    reservation: ReservationCreate
    amount: float = Field(gt=0)
    method: str = "card"


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    restaurant_id: UUID
    table_id: UUID
    customer_id: Optional[str]
    customer_name: str
    customer_email: Optional[str]
    customer_phone: Optional[str]
    date: date
    time: ClockTime
    duration_minutes: int
    party_size: int
    status: ReservationStatus
    special_requests: Optional[str]
    payment_ref: Optional[str]
    payment_amount: Optional[float]
    payment_status: Optional[PaymentStatus]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    """Reservation list"""
    items: List[ReservationResponse]
    total: int
