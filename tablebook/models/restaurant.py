"""Restaurant and table models"""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional


class TableZone(str, enum.Enum):
    """Where a table sits"""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    PRIVATE = "private"


class TableStatus(str, enum.Enum):
    """Floor status of a table, maintained independently of reservations"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"


@dataclass
class OpeningHours:
    """Opening hours for one weekday ("HH:MM", close may be "24:00")"""
    open: str
    close: str


@dataclass
class Restaurant:
    """Restaurant aggregate; tables, reservations, blocks and waitlist hang off its id"""
    name: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    timezone: str = "America/New_York"

    # Weekday name -> hours. Missing weekday: default hours. None: closed.
    opening_hours: Dict[str, Optional[OpeningHours]] = field(default_factory=dict)

    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Table:
    """Physical table; never deleted, only re-statused"""
    restaurant_id: uuid.UUID
    number: int
    capacity: int
    zone: TableZone = TableZone.INDOOR
    status: TableStatus = TableStatus.AVAILABLE
    id: uuid.UUID = field(default_factory=uuid.uuid4)
