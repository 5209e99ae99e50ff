import logging
from typing import Any

from app.services.store.base import DocumentStore

logger = logging.getLogger(__name__)


class FormValidationError(ValueError):
    """raised when a form payload is not a JSON object."""


def submit_form(payload: Any, store: DocumentStore, collection: str = "emails") -> str:
    """append a contact-form payload as a new document; returns its id."""
    if not isinstance(payload, dict):
        raise FormValidationError(f"form payload must be an object, got {type(payload).__name__}")
    doc_id = store.collection(collection).add(payload)
    logger.info(f"Form submission stored as {collection}/{doc_id}")
    return doc_id
