"""Blocked time slot management"""

from datetime import date
from typing import List, Optional
from uuid import UUID

import structlog

from tablebook.core.errors import InvalidRange, NotFound
from tablebook.core.timeslots import format_minutes
from tablebook.models import BlockedSlot
from tablebook.schemas.block import BlockCreate
from tablebook.services.availability import AvailabilityEngine

logger = structlog.get_logger()


class BlockService:

    def __init__(self, engine: AvailabilityEngine):
        self.engine = engine
        self.blocks = engine.blocks
        self.tables = engine.tables
        self.locks = engine.locks

    def block_time_slot(self, restaurant_id: UUID, data: BlockCreate) -> BlockedSlot:
        """
        Close a time range, restaurant-wide or for listed tables.

        Raises:
            InvalidRange: end is not after start
            NotFound: unknown restaurant or a table outside the restaurant
        """
        if data.start_time >= data.end_time:
            raise InvalidRange(
                f"Block end {format_minutes(data.end_time)} must be after start {format_minutes(data.start_time)}"
            )

        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)

            for table_id in data.table_ids:
                table = self.tables.get(table_id)
                if table is None or table.restaurant_id != restaurant_id:
                    raise NotFound("Table", table_id)

            block = self.blocks.add(BlockedSlot(
                restaurant_id=restaurant_id,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                reason=data.reason,
                created_by=data.created_by,
                table_ids=list(data.table_ids),
            ))

        logger.info(
            "Time slot blocked",
            restaurant_id=str(restaurant_id),
            block_id=str(block.id),
            date=block.date.isoformat(),
            start=format_minutes(block.start_time),
            end=format_minutes(block.end_time),
            tables=len(block.table_ids),
        )
        return block

    def remove_blocked_slot(self, restaurant_id: UUID, block_id: UUID) -> BlockedSlot:
        with self.locks.hold(restaurant_id):
            block = self.blocks.get(block_id)
            if block is None or block.restaurant_id != restaurant_id:
                raise NotFound("Blocked slot", block_id)
            self.blocks.remove(block_id)

        logger.info("Blocked slot removed", block_id=str(block_id))
        return block

    def list_blocked_slots(self, restaurant_id: UUID, on_date: Optional[date] = None) -> List[BlockedSlot]:
        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)
            return self.blocks.for_restaurant(restaurant_id, on_date)
