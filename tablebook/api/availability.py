"""Availability API endpoints"""

from datetime import date
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from tablebook.api.deps import get_engine
from tablebook.schemas.availability import (
    AvailabilityCalendar,
    AvailableSlot,
    BestTableResponse,
    TimeSlot,
)
from tablebook.services.availability import AvailabilityEngine

router = APIRouter()


@router.get("/slot", response_model=TimeSlot)
async def check_slot_availability(
    restaurant_id: UUID,
    date: date,
    time: str,
    engine: AvailabilityEngine = Depends(get_engine),
):
    """Free tables and capacity at one time"""
    return engine.check_slot_availability(restaurant_id, date, time)


@router.get("/calendar", response_model=AvailabilityCalendar)
async def get_calendar(
    restaurant_id: UUID,
    date: date,
    engine: AvailabilityEngine = Depends(get_engine),
):
    """Availability for every slot of a day"""
    return engine.build_calendar(restaurant_id, date)


@router.get("/best_table", response_model=BestTableResponse)
async def find_best_table(
    restaurant_id: UUID,
    date: date,
    time: str,
    party_size: int = Query(..., ge=1),
    engine: AvailabilityEngine = Depends(get_engine),
):
    """Smallest free table that fits the party"""
    table = engine.find_best_table(restaurant_id, date, time, party_size)
    if table is None:
        return BestTableResponse()

    return BestTableResponse(
        table_id=table.id,
        table_number=table.number,
        capacity=table.capacity,
    )


@router.get("/slots", response_model=List[AvailableSlot])
async def list_available_slots(
    restaurant_id: UUID,
    date: date,
    party_size: int = Query(..., ge=1),
    engine: AvailabilityEngine = Depends(get_engine),
):
    """Every bookable slot of the day for a party"""
    return engine.available_slots(restaurant_id, date, party_size)
