import logging
from typing import Optional

from pydantic import ValidationError

from app.schemas.checkout import Product
from .base import DocumentStore

logger = logging.getLogger(__name__)


class Catalog:
    """read-only product lookup over the products collection."""

    def __init__(self, store: DocumentStore, collection: str = "products"):
        self._products = store.collection(collection)

    def get(self, product_id: str) -> Optional[Product]:
        doc = self._products.get(product_id)
        if doc is None:
            return None
        try:
            return Product.model_validate(doc)
        except ValidationError as e:
            # malformed catalog entries are treated like missing ones
            logger.warning(f"Product {product_id} has an invalid catalog record: {e}")
            return None
