import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence

from app.core.config import Settings
from app.schemas.checkout import CartItem, LineItem, Product, to_minor_units
from app.services.payments.base import PaymentsProvider

logger = logging.getLogger(__name__)

CatalogLookup = Callable[[str], Optional[Product]]


def _describe(product: Product) -> str:
    if product.color_name:
        return f"{product.name} | {product.color_name}"
    return product.name


def to_line_item(product: Product, quantity: int, currency: str = "usd") -> LineItem:
    return LineItem(
        currency=currency,
        product_name=product.name,
        images=product.image_urls,
        unit_amount=to_minor_units(product.effective_price),
        quantity=quantity,
        description=_describe(product),
    )


def build_line_items(
    cart_items: Sequence[CartItem],
    catalog_lookup: CatalogLookup,
    currency: str = "usd",
    max_workers: int = 8,
) -> List[LineItem]:
    """resolve cart items against the catalog, dropping unknown products.

    Lookups run concurrently; the result keeps the cart's order.
    """
    if not cart_items:
        return []

    workers = max(1, min(max_workers, len(cart_items)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order regardless of completion order
        products = list(pool.map(catalog_lookup, [item.product_id for item in cart_items]))

    line_items: List[LineItem] = []
    for item, product in zip(cart_items, products):
        if product is None:
            logger.info(f"Product {item.product_id} not found, dropping from checkout")
            continue
        line_items.append(to_line_item(product, item.quantity, currency))
    return line_items


def session_params(line_items: Sequence[LineItem], settings: Settings) -> Dict[str, Any]:
    return {
        "billing_address_collection": "auto",
        "shipping_address_collection": {
            "allowed_countries": list(settings.CHECKOUT_ALLOWED_COUNTRIES),
        },
        "payment_method_types": ["card"],
        "line_items": [li.to_stripe() for li in line_items],
        "mode": "payment",
        "success_url": settings.CHECKOUT_SUCCESS_URL,
        "cancel_url": settings.CHECKOUT_CANCEL_URL,
    }


def create_checkout_session(
    line_items: Sequence[LineItem],
    payments: PaymentsProvider,
    settings: Settings,
) -> Dict[str, Any]:
    """ask the provider for a hosted checkout session; raises PaymentsError."""
    session = payments.create_session(session_params(line_items, settings))
    logger.info(f"Checkout session {session.get('id')} created with {len(line_items)} line items")
    return session
