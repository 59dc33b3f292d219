"""Blocked time slot API endpoints"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from tablebook.api.deps import get_block_service
from tablebook.schemas.block import BlockCreate, BlockResponse
from tablebook.services.blocks import BlockService

router = APIRouter()


@router.get("", response_model=List[BlockResponse])
async def list_blocked_slots(
    restaurant_id: UUID,
    date: Optional[date] = None,
    blocks: BlockService = Depends(get_block_service),
):
    """List blocks, optionally for one date"""
    return blocks.list_blocked_slots(restaurant_id, date)


@router.post("", response_model=BlockResponse, status_code=201)
async def block_time_slot(
    restaurant_id: UUID,
    block_data: BlockCreate,
    blocks: BlockService = Depends(get_block_service),
):
    """Block a time range"""
    return blocks.block_time_slot(restaurant_id, block_data)


@router.delete("/{block_id}", status_code=204)
async def remove_blocked_slot(
    restaurant_id: UUID,
    block_id: UUID,
    blocks: BlockService = Depends(get_block_service),
):
    """Remove a block"""
    blocks.remove_blocked_slot(restaurant_id, block_id)
    return Response(status_code=204)
