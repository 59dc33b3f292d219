"""
Demo data for development
"""

import structlog

from tablebook.container import ServiceContainer
from tablebook.models import Restaurant, TableZone
from tablebook.schemas.restaurant import OpeningHoursSchema, RestaurantCreate, TableCreate

logger = structlog.get_logger()

DEMO_RESTAURANT_NAME = "The Garden Bistro"


def seed_demo_data(container: ServiceContainer) -> Restaurant:
    """Create the demo restaurant unless it already exists"""
    for existing in container.restaurants.list_restaurants():
        if existing.name == DEMO_RESTAURANT_NAME:
            logger.info("Demo data already exists. Skipping...")
            return existing

    weekday = OpeningHoursSchema(open="11:00", close="22:00")
    restaurant = container.restaurants.create_restaurant(RestaurantCreate(
        name=DEMO_RESTAURANT_NAME,
        timezone="America/New_York",
        opening_hours={
            "monday": weekday,
            "tuesday": weekday,
            "wednesday": weekday,
            "thursday": weekday,
            "friday": OpeningHoursSchema(open="11:00", close="23:00"),
            "saturday": OpeningHoursSchema(open="10:00", close="23:00"),
            "sunday": OpeningHoursSchema(open="10:00", close="21:00"),
        },
        tables=[
            TableCreate(number=1, capacity=2, zone=TableZone.INDOOR),
            TableCreate(number=2, capacity=4, zone=TableZone.INDOOR),
            TableCreate(number=3, capacity=6, zone=TableZone.INDOOR),
            TableCreate(number=4, capacity=2, zone=TableZone.OUTDOOR),
            TableCreate(number=5, capacity=4, zone=TableZone.OUTDOOR),
            TableCreate(number=6, capacity=8, zone=TableZone.PRIVATE),
        ],
    ))

    logger.info("Seeded demo restaurant", restaurant_id=str(restaurant.id))
    return restaurant
