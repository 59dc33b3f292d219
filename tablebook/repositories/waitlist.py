"""In-memory waitlist store"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from tablebook.models import WaitlistEntry
from tablebook.repositories.base import BaseWaitlistRepository


class InMemoryWaitlistRepository(BaseWaitlistRepository):
    """
    Waitlist entries per restaurant.

    Priorities come from a per-restaurant counter that only ever grows,
    so removing an entry never shifts the rank of the others.
    """

    def __init__(self):
        self._by_id: Dict[UUID, WaitlistEntry] = {}
        self._by_restaurant: Dict[UUID, List[UUID]] = defaultdict(list)
        self._counters: Dict[UUID, int] = defaultdict(int)

    def add(self, entry: WaitlistEntry) -> WaitlistEntry:
        self._counters[entry.restaurant_id] += 1
        entry.priority = self._counters[entry.restaurant_id]

        self._by_id[entry.id] = entry
        self._by_restaurant[entry.restaurant_id].append(entry.id)
        return entry

    def get(self, entry_id: UUID) -> Optional[WaitlistEntry]:
        return self._by_id.get(entry_id)

    def remove(self, entry_id: UUID) -> Optional[WaitlistEntry]:
        entry = self._by_id.pop(entry_id, None)
        if entry is not None:
            self._by_restaurant[entry.restaurant_id].remove(entry_id)
        return entry

    def for_restaurant(self, restaurant_id: UUID, on_date: Optional[date] = None) -> List[WaitlistEntry]:
        entries = [self._by_id[eid] for eid in self._by_restaurant.get(restaurant_id, [])]
        if on_date is not None:
            entries = [e for e in entries if e.date == on_date]
        return sorted(entries, key=lambda e: e.priority)

    def count(self, restaurant_id: UUID, on_date: date, time: int) -> int:
        return sum(
            1
            for e in self.for_restaurant(restaurant_id, on_date)
            if e.time == time
        )
