"""Restaurant and table registry management"""

from typing import List
from uuid import UUID

import structlog

from tablebook.core.errors import InvalidRequest
from tablebook.models import OpeningHours, Restaurant, Table
from tablebook.schemas.restaurant import RestaurantCreate, TableCreate
from tablebook.services.availability import AvailabilityEngine

logger = structlog.get_logger()


class RestaurantService:

    def __init__(self, engine: AvailabilityEngine):
        self.engine = engine
        self.restaurants = engine.restaurants
        self.tables = engine.tables
        self.locks = engine.locks

    def create_restaurant(self, data: RestaurantCreate) -> Restaurant:
        restaurant = Restaurant(
            name=data.name,
            timezone=data.timezone,
            opening_hours={
                day: OpeningHours(open=hours.open, close=hours.close) if hours else None
                for day, hours in data.opening_hours.items()
            },
        )

        self.locks.register(restaurant.id)
        with self.locks.hold(restaurant.id):
            self.restaurants.add(restaurant)
            for table_data in data.tables:
                self._add_table(restaurant.id, table_data)

        logger.info(
            "Restaurant created",
            restaurant_id=str(restaurant.id),
            name=restaurant.name,
            tables=len(data.tables),
        )
        return restaurant

    def get_restaurant(self, restaurant_id: UUID) -> Restaurant:
        return self.engine.get_restaurant(restaurant_id)

    def list_restaurants(self) -> List[Restaurant]:
        return self.restaurants.list()

    def tables_of(self, restaurant_id: UUID) -> List[Table]:
        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)
            return self.tables.tables_of(restaurant_id)

    def add_table(self, restaurant_id: UUID, data: TableCreate) -> Table:
        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)
            table = self._add_table(restaurant_id, data)

        logger.info("Table added", restaurant_id=str(restaurant_id), number=table.number)
        return table

    def _add_table(self, restaurant_id: UUID, data: TableCreate) -> Table:
        if any(t.number == data.number for t in self.tables.tables_of(restaurant_id)):
            raise InvalidRequest(f"Table number {data.number} already exists")

        return self.tables.add(Table(
            restaurant_id=restaurant_id,
            number=data.number,
            capacity=data.capacity,
            zone=data.zone,
            status=data.status,
        ))
