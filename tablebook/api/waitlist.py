"""Waitlist API endpoints"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from tablebook.api.deps import get_waitlist_service
from tablebook.schemas.waitlist import WaitlistCreate, WaitlistResponse
from tablebook.services.waitlist import WaitlistService

router = APIRouter()


@router.get("", response_model=List[WaitlistResponse])
async def list_waitlist(
    restaurant_id: UUID,
    date: Optional[date] = None,
    waitlist: WaitlistService = Depends(get_waitlist_service),
):
    """Waitlist ordered by priority"""
    return waitlist.list_waitlist(restaurant_id, date)


@router.post("", response_model=WaitlistResponse, status_code=201)
async def add_to_waitlist(
    restaurant_id: UUID,
    entry_data: WaitlistCreate,
    waitlist: WaitlistService = Depends(get_waitlist_service),
):
    """Join the waitlist"""
    return waitlist.add_to_waitlist(restaurant_id, entry_data)


@router.delete("/{entry_id}", status_code=204)
async def remove_waitlist_entry(
    restaurant_id: UUID,
    entry_id: UUID,
    waitlist: WaitlistService = Depends(get_waitlist_service),
):
    """Remove a waitlist entry"""
    waitlist.remove_waitlist_entry(restaurant_id, entry_id)
    return Response(status_code=204)


@router.post("/{entry_id}/notify", response_model=WaitlistResponse)
async def notify_waitlist_entry(
    restaurant_id: UUID,
    entry_id: UUID,
    waitlist: WaitlistService = Depends(get_waitlist_service),
):
    """Tell the customer a table is free"""
    return waitlist.notify_waitlist_entry(restaurant_id, entry_id)
