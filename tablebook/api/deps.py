"""FastAPI dependencies"""

from fastapi import Depends, Request

from tablebook.container import ServiceContainer
from tablebook.services.availability import AvailabilityEngine
from tablebook.services.blocks import BlockService
from tablebook.services.booking import BookingService
from tablebook.services.restaurants import RestaurantService
from tablebook.services.waitlist import WaitlistService


def get_container(request: Request) -> ServiceContainer:
    """Container attached to the application at startup"""
    return request.app.state.container


def get_engine(container: ServiceContainer = Depends(get_container)) -> AvailabilityEngine:
    return container.engine


def get_restaurant_service(container: ServiceContainer = Depends(get_container)) -> RestaurantService:
    return container.restaurants


def get_booking_service(container: ServiceContainer = Depends(get_container)) -> BookingService:
    return container.booking


def get_block_service(container: ServiceContainer = Depends(get_container)) -> BlockService:
    return container.blocks


def get_waitlist_service(container: ServiceContainer = Depends(get_container)) -> WaitlistService:
    return container.waitlist
