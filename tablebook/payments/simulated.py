"""Simulated payment provider for development and tests"""

import asyncio
import uuid
from typing import Iterable

import structlog

from tablebook.core.errors import PaymentDeclined
from tablebook.payments.base import BasePaymentProvider, ChargeStatus, PaymentResult

logger = structlog.get_logger()


class SimulatedPaymentProvider(BasePaymentProvider):
    """Approves every charge except non-positive amounts and listed methods"""

    name = "simulated"

    def __init__(self, declined_methods: Iterable[str] = (), latency_seconds: float = 0.0):
        self.declined_methods = set(declined_methods)
        self.latency_seconds = latency_seconds

    async def charge(self, amount: float, method: str) -> PaymentResult:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

        if amount <= 0:
            raise PaymentDeclined(f"Invalid amount: {amount}")

        if method in self.declined_methods:
            logger.info("Simulated payment declined", method=method)
            raise PaymentDeclined(f"Payment method declined: {method}")

        payment_ref = f"pay-{uuid.uuid4().hex[:12]}"
        logger.info("Simulated payment completed", payment_ref=payment_ref, amount=amount)
        return PaymentResult(payment_ref=payment_ref, status=ChargeStatus.COMPLETED)
