"""Blocked time slot model"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List


@dataclass
class BlockedSlot:
    """
    Manually closed time range (maintenance, private events).

    An empty ``table_ids`` list closes the whole restaurant for the range;
    otherwise only the listed tables are closed. Blocks never expire.
    """
    restaurant_id: uuid.UUID
    date: date
    start_time: int  # minutes since midnight, inclusive
    end_time: int  # exclusive
    reason: str
    created_by: str
    table_ids: List[uuid.UUID] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def restaurant_wide(self) -> bool:
        return not self.table_ids

    def covers(self, time: int) -> bool:
        return self.start_time <= time < self.end_time

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end_time and end > self.start_time
