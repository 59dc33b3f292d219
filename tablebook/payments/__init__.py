"""Payment provider implementations"""

from tablebook.config import Settings
from tablebook.payments.base import BasePaymentProvider, ChargeStatus, PaymentResult
from tablebook.payments.simulated import SimulatedPaymentProvider


def get_payment_provider(settings: Settings) -> BasePaymentProvider:
    """Build the configured payment provider"""
    providers = {
        "simulated": lambda: SimulatedPaymentProvider(
            declined_methods=settings.payment_declined_methods_list,
        ),
    }

    factory = providers.get(settings.payment_provider)
    if not factory:
        raise ValueError(f"Unknown payment provider: {settings.payment_provider}")

    return factory()


__all__ = [
    "BasePaymentProvider",
    "ChargeStatus",
    "PaymentResult",
    "SimulatedPaymentProvider",
    "get_payment_provider",
]
