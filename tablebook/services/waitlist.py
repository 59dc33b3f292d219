"""Waitlist management"""

from datetime import date
from typing import List, Optional
from uuid import UUID

import structlog

from tablebook.core.errors import NotFound
from tablebook.core.timeslots import format_minutes
from tablebook.models import WaitlistEntry
from tablebook.schemas.waitlist import WaitlistCreate
from tablebook.services.availability import AvailabilityEngine
from tablebook.services.notifications import CeleryWaitlistNotifier

logger = structlog.get_logger()


class WaitlistService:
    """Priority-ordered queue of customers waiting for a full slot"""

    def __init__(self, engine: AvailabilityEngine, notifier=None):
        self.engine = engine
        self.waitlist = engine.waitlist
        self.locks = engine.locks
        self.notifier = notifier or CeleryWaitlistNotifier()

    def _entry(self, restaurant_id: UUID, entry_id: UUID) -> WaitlistEntry:
        entry = self.waitlist.get(entry_id)
        if entry is None or entry.restaurant_id != restaurant_id:
            raise NotFound("Waitlist entry", entry_id)
        return entry

    def add_to_waitlist(self, restaurant_id: UUID, data: WaitlistCreate) -> WaitlistEntry:
        """Append a customer; the store assigns the next priority"""
        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)
            entry = self.waitlist.add(WaitlistEntry(
                restaurant_id=restaurant_id,
                date=data.date,
                time=data.time,
                party_size=data.party_size,
                customer_name=data.customer_name,
                customer_email=data.customer_email,
                customer_phone=data.customer_phone,
            ))

        logger.info(
            "Added to waitlist",
            restaurant_id=str(restaurant_id),
            entry_id=str(entry.id),
            date=entry.date.isoformat(),
            time=format_minutes(entry.time),
            priority=entry.priority,
        )
        return entry

    def list_waitlist(self, restaurant_id: UUID, on_date: Optional[date] = None) -> List[WaitlistEntry]:
        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)
            return self.waitlist.for_restaurant(restaurant_id, on_date)

    def remove_waitlist_entry(self, restaurant_id: UUID, entry_id: UUID) -> WaitlistEntry:
        with self.locks.hold(restaurant_id):
            entry = self._entry(restaurant_id, entry_id)
            self.waitlist.remove(entry.id)
        return entry

    def notify_waitlist_entry(self, restaurant_id: UUID, entry_id: UUID) -> WaitlistEntry:
        """
        Mark an entry notified and hand the notification off.

        The flag flips once; repeated calls return the entry without
        dispatching again. Dispatch happens after the lock is released.
        """
        with self.locks.hold(restaurant_id):
            restaurant = self.engine.get_restaurant(restaurant_id)
            entry = self._entry(restaurant_id, entry_id)
            already_notified = entry.notified
            entry.notified = True

        if already_notified:
            logger.info("Waitlist entry already notified", entry_id=str(entry_id))
            return entry

        self.notifier.dispatch(entry, restaurant)
        return entry
