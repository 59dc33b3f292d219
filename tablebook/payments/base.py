"""Base payment provider interface"""

import enum
from abc import ABC, abstractmethod

from pydantic import BaseModel


class ChargeStatus(str, enum.Enum):
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentResult(BaseModel):
    """Outcome of a charge"""
    payment_ref: str
    status: ChargeStatus


class BasePaymentProvider(ABC):
    """
    Abstract base class for payment providers.

    The engine never prices a booking; it hands an amount and a method to
    the provider and records what comes back.
    """

    name: str = "base"

    @abstractmethod
    async def charge(self, amount: float, method: str) -> PaymentResult:
        """Charge ``amount``; raise PaymentDeclined when refused"""
        pass
