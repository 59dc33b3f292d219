"""Reservation management API endpoints"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from tablebook.api.deps import get_booking_service
from tablebook.models import ReservationStatus
from tablebook.schemas.reservation import (
    CheckoutRequest,
    PaymentUpdate,
    ReservationCreate,
    ReservationListResponse,
    ReservationResponse,
    ReservationStatusUpdate,
)
from tablebook.services.booking import BookingService

router = APIRouter()


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    restaurant_id: UUID,
    date: Optional[date] = None,
    status: Optional[ReservationStatus] = None,
    booking: BookingService = Depends(get_booking_service),
):
    """List reservations for a restaurant"""
    reservations = booking.list_reservations(restaurant_id, date, status)
    return ReservationListResponse(
        items=[ReservationResponse.model_validate(r) for r in reservations],
        total=len(reservations),
    )


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    restaurant_id: UUID,
    reservation_data: ReservationCreate,
    booking: BookingService = Depends(get_booking_service),
):
    """Create a new reservation"""
    return booking.create_reservation(restaurant_id, reservation_data)


@router.post("/checkout", response_model=ReservationResponse, status_code=201)
async def checkout(
    restaurant_id: UUID,
    checkout_data: CheckoutRequest,
    booking: BookingService = Depends(get_booking_service),
):
    """Reserve a table, take payment, then confirm"""
    return await booking.book_with_payment(
        restaurant_id,
        checkout_data.reservation,
        checkout_data.amount,
        checkout_data.method,
    )


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    restaurant_id: UUID,
    reservation_id: UUID,
    booking: BookingService = Depends(get_booking_service),
):
    """Get reservation details"""
    return booking.get_reservation(restaurant_id, reservation_id)


@router.put("/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    restaurant_id: UUID,
    reservation_id: UUID,
    status_data: ReservationStatusUpdate,
    booking: BookingService = Depends(get_booking_service),
):
    """Move a reservation along its lifecycle"""
    return booking.update_status(restaurant_id, reservation_id, status_data.status)


@router.put("/{reservation_id}/payment", response_model=ReservationResponse)
async def update_reservation_payment(
    restaurant_id: UUID,
    reservation_id: UUID,
    payment_data: PaymentUpdate,
    booking: BookingService = Depends(get_booking_service),
):
    """Record an externally captured payment"""
    return booking.record_payment(
        restaurant_id,
        reservation_id,
        payment_data.payment_ref,
        payment_data.payment_amount,
        payment_data.payment_status,
    )


@router.delete("/{reservation_id}", status_code=204)
async def cancel_reservation(
    restaurant_id: UUID,
    reservation_id: UUID,
    booking: BookingService = Depends(get_booking_service),
):
    """Cancel a reservation"""
    booking.update_status(restaurant_id, reservation_id, ReservationStatus.CANCELLED)
    return Response(status_code=204)
