"""Wiring of stores and services"""

from datetime import date
from typing import Callable, Optional

from tablebook.config import Settings, settings as default_settings
from tablebook.payments import BasePaymentProvider, get_payment_provider
from tablebook.repositories import (
    InMemoryBlockRepository,
    InMemoryReservationRepository,
    InMemoryRestaurantRepository,
    InMemoryTableRepository,
    InMemoryWaitlistRepository,
)
from tablebook.services.availability import AvailabilityEngine
from tablebook.services.blocks import BlockService
from tablebook.services.booking import BookingService
from tablebook.services.locks import RestaurantLocks
from tablebook.services.restaurants import RestaurantService
from tablebook.services.waitlist import WaitlistService


class ServiceContainer:
    """
    One instance of every store and service, built from settings.

    Constructed once per application (or per test) and passed around;
    nothing here is a process-wide singleton.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        payments: Optional[BasePaymentProvider] = None,
        notifier=None,
        clock: Callable[[], date] = date.today,
    ):
        self.settings = settings or default_settings

        self.locks = RestaurantLocks()
        self.engine = AvailabilityEngine(
            restaurants=InMemoryRestaurantRepository(),
            tables=InMemoryTableRepository(),
            reservations=InMemoryReservationRepository(),
            blocks=InMemoryBlockRepository(),
            waitlist=InMemoryWaitlistRepository(),
            locks=self.locks,
            settings=self.settings,
        )

        self.restaurants = RestaurantService(self.engine)
        self.booking = BookingService(
            self.engine,
            payments=payments or get_payment_provider(self.settings),
            clock=clock,
        )
        self.blocks = BlockService(self.engine)
        self.waitlist = WaitlistService(self.engine, notifier=notifier)
