"""Restaurant and table schemas"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from tablebook.core.errors import InvalidTimeFormat
from tablebook.core.timeslots import WEEKDAYS, to_minutes
from tablebook.models import TableStatus, TableZone


class OpeningHoursSchema(BaseModel):
    """Opening hours for one weekday"""
    open: str
    close: str

    @field_validator("open", "close")
    @classmethod
    def validate_time(cls, value: str) -> str:
        try:
            to_minutes(value)
        except InvalidTimeFormat as exc:
            raise ValueError(exc.message) from exc
        return value


class TableCreate(BaseModel):
    """Create table request"""
    number: int = Field(gt=0)
    capacity: int = Field(gt=0)
    zone: TableZone = TableZone.INDOOR
    status: TableStatus = TableStatus.AVAILABLE


class TableResponse(BaseModel):
    """Table response"""
    id: UUID
    restaurant_id: UUID
    number: int
    capacity: int
    zone: TableZone
    status: TableStatus

    class Config:
        from_attributes = True


class TableStatusUpdate(BaseModel):
    """Staff table status change"""
    status: TableStatus


class RestaurantCreate(BaseModel):
    """Create restaurant request"""
    name: str
    timezone: str = "America/New_York"
    opening_hours: Dict[str, Optional[OpeningHoursSchema]] = {}
    tables: List[TableCreate] = []

    @field_validator("opening_hours")
    @classmethod
    def validate_weekdays(cls, value: Dict[str, Optional[OpeningHoursSchema]]):
        unknown = [day for day in value if day not in WEEKDAYS]
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
        return value

    @field_validator("tables")
    @classmethod
    def validate_unique_numbers(cls, value: List[TableCreate]) -> List[TableCreate]:
        numbers = [t.number for t in value]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Table numbers must be unique")
        return value


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    name: str
    timezone: str
    opening_hours: Dict[str, Optional[OpeningHoursSchema]]
    tables: List[TableResponse] = []
    created_at: datetime
