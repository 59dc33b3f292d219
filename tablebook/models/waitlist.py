"""Waitlist model"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass
class WaitlistEntry:
    """Customer waiting for a slot that is currently full"""
    restaurant_id: uuid.UUID
    date: date
    time: int  # minutes since midnight
    party_size: int

    # Customer contact
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    # FIFO rank assigned by the store at insertion, never renumbered
    priority: int = 0
    notified: bool = False

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
