"""Per-restaurant exclusive sections"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator
from uuid import UUID

from tablebook.core.errors import NotFound


class RestaurantLocks:
    """
    One re-entrant lock per registered restaurant.

    Every read-then-write sequence against a restaurant's tables,
    reservations, blocks or waitlist runs inside ``hold(restaurant_id)``.
    Reads take the same lock so they see a consistent snapshot across
    the stores. Nothing may await external I/O while holding it.

    Locks exist only for restaurants registered at creation; holding an
    unknown id raises NotFound and leaves the registry untouched.
    """

    def __init__(self):
        self._locks: Dict[UUID, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._locks)

    def __contains__(self, restaurant_id: UUID) -> bool:
        return restaurant_id in self._locks

    def register(self, restaurant_id: UUID) -> None:
        with self._registry_lock:
            self._locks.setdefault(restaurant_id, threading.RLock())

    @contextmanager
    def hold(self, restaurant_id: UUID) -> Iterator[None]:
        with self._registry_lock:
            lock = self._locks.get(restaurant_id)
        if lock is None:
            raise NotFound("Restaurant", restaurant_id)

        with lock:
            yield
