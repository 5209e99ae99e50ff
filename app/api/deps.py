from fastapi import Depends

from app.core.config import settings
from app.services.orders.fulfillment import OrderFulfillment
from app.services.payments.base import PaymentsProvider
from app.services.payments.factory import get_payments
from app.services.store.base import DocumentStore
from app.services.store.catalog import Catalog
from app.services.store.factory import get_store


def get_catalog(store: DocumentStore = Depends(get_store)) -> Catalog:
    return Catalog(store, settings.PRODUCTS_COLLECTION)


def get_fulfillment(
    payments: PaymentsProvider = Depends(get_payments),
    store: DocumentStore = Depends(get_store),
) -> OrderFulfillment:
    return OrderFulfillment(
        payments=payments,
        store=store,
        webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
        orders_collection=settings.ORDERS_COLLECTION,
        failures_collection=settings.FAILED_FULFILLMENTS_COLLECTION,
        tolerance=settings.STRIPE_WEBHOOK_TOLERANCE,
    )
