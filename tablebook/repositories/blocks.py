"""In-memory block store"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from tablebook.models import BlockedSlot
from tablebook.repositories.base import BaseBlockRepository


class InMemoryBlockRepository(BaseBlockRepository):

    def __init__(self):
        self._by_id: Dict[UUID, BlockedSlot] = {}
        self._by_restaurant: Dict[UUID, List[UUID]] = defaultdict(list)

    def add(self, block: BlockedSlot) -> BlockedSlot:
        self._by_id[block.id] = block
        self._by_restaurant[block.restaurant_id].append(block.id)
        return block

    def get(self, block_id: UUID) -> Optional[BlockedSlot]:
        return self._by_id.get(block_id)

    def remove(self, block_id: UUID) -> Optional[BlockedSlot]:
        block = self._by_id.pop(block_id, None)
        if block is not None:
            self._by_restaurant[block.restaurant_id].remove(block_id)
        return block

    def for_restaurant(self, restaurant_id: UUID, on_date: Optional[date] = None) -> List[BlockedSlot]:
        blocks = [self._by_id[bid] for bid in self._by_restaurant.get(restaurant_id, [])]
        if on_date is not None:
            blocks = [b for b in blocks if b.date == on_date]
        return blocks
