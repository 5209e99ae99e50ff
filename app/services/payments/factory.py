from functools import lru_cache

from app.core.config import settings
from .base import PaymentsProvider
from .mock import MockPayments
from .stripe_provider import StripePayments


@lru_cache(maxsize=1)
def get_payments() -> PaymentsProvider:
    provider = settings.PAYMENTS_PROVIDER.lower()
    if provider == "mock":
        return MockPayments()
    if not settings.STRIPE_SECRET_KEY:
        raise RuntimeError("STRIPE_SECRET_KEY is not set")
    return StripePayments(settings.STRIPE_SECRET_KEY)
