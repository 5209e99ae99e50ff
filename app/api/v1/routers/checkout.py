import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_catalog
from app.core.config import settings
from app.schemas.checkout import CartItem, CheckoutSessionResponse
from app.services.checkout.line_items import build_line_items, create_checkout_session
from app.services.payments.base import PaymentsError, PaymentsProvider
from app.services.payments.factory import get_payments
from app.services.store.base import StoreError
from app.services.store.catalog import Catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
def create_checkout(
    items: List[CartItem],
    payments: PaymentsProvider = Depends(get_payments),
    catalog: Catalog = Depends(get_catalog),
):
    """build line items from the cart and open a hosted checkout session."""
    logger.info(f"Creating checkout session. Cart: {[i.model_dump(by_alias=True) for i in items]}")
    try:
        line_items = build_line_items(
            items,
            catalog.get,
            currency=settings.CHECKOUT_CURRENCY,
            max_workers=settings.CATALOG_LOOKUP_WORKERS,
        )
    except StoreError as e:
        logger.error(f"Catalog lookup failed: {e}")
        raise HTTPException(status_code=503, detail="Catalog unavailable")

    if not line_items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    try:
        session = create_checkout_session(line_items, payments, settings)
    except PaymentsError:
        raise HTTPException(status_code=502, detail="Unable to create checkout session")
    return CheckoutSessionResponse(id=session["id"])
