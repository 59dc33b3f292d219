"""Restaurant and table registry API endpoints"""

from dataclasses import asdict
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from tablebook.api.deps import get_booking_service, get_restaurant_service
from tablebook.models import Restaurant, Table
from tablebook.schemas.restaurant import (
    RestaurantCreate,
    RestaurantResponse,
    TableCreate,
    TableResponse,
    TableStatusUpdate,
)
from tablebook.services.booking import BookingService
from tablebook.services.restaurants import RestaurantService

router = APIRouter()


def _restaurant_response(restaurant: Restaurant, tables: List[Table]) -> RestaurantResponse:
    return RestaurantResponse(
        id=restaurant.id,
        name=restaurant.name,
        timezone=restaurant.timezone,
        opening_hours={
            day: asdict(hours) if hours else None
            for day, hours in restaurant.opening_hours.items()
        },
        tables=[TableResponse.model_validate(t) for t in tables],
        created_at=restaurant.created_at,
    )


@router.get("", response_model=List[RestaurantResponse])
async def list_restaurants(
    service: RestaurantService = Depends(get_restaurant_service),
):
    """List restaurants"""
    return [
        _restaurant_response(r, service.tables_of(r.id))
        for r in service.list_restaurants()
    ]


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    service: RestaurantService = Depends(get_restaurant_service),
):
    """Create a restaurant with its tables"""
    restaurant = service.create_restaurant(restaurant_data)
    return _restaurant_response(restaurant, service.tables_of(restaurant.id))


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    service: RestaurantService = Depends(get_restaurant_service),
):
    """Get restaurant details"""
    restaurant = service.get_restaurant(restaurant_id)
    return _restaurant_response(restaurant, service.tables_of(restaurant_id))


@router.get("/{restaurant_id}/tables", response_model=List[TableResponse])
async def list_tables(
    restaurant_id: UUID,
    service: RestaurantService = Depends(get_restaurant_service),
):
    """List tables ordered by number"""
    return service.tables_of(restaurant_id)


@router.post("/{restaurant_id}/tables", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def add_table(
    restaurant_id: UUID,
    table_data: TableCreate,
    service: RestaurantService = Depends(get_restaurant_service),
):
    """Add a table"""
    return service.add_table(restaurant_id, table_data)


@router.put("/{restaurant_id}/tables/{table_id}/status", response_model=TableResponse)
async def update_table_status(
    restaurant_id: UUID,
    table_id: UUID,
    status_data: TableStatusUpdate,
    booking: BookingService = Depends(get_booking_service),
):
    """Change a table's floor status (does not affect reservations)"""
    return booking.set_table_status(restaurant_id, table_id, status_data.status)
