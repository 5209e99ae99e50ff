import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions

from app.core.config import settings
from .base import Collection, DocumentStore, StoreError

logger = logging.getLogger(__name__)


def _ensure_app() -> firebase_admin.App:
    """initialize the default firebase app once per process."""
    if firebase_admin._apps:  # type: ignore
        return firebase_admin.get_app()
    options = {"projectId": settings.FIRESTORE_PROJECT_ID} if settings.FIRESTORE_PROJECT_ID else None
    cred_path = settings.GOOGLE_APPLICATION_CREDENTIALS
    # fall back to application default credentials (cloud runtime)
    cred = credentials.Certificate(cred_path) if cred_path else credentials.ApplicationDefault()
    logger.info("Initializing firebase app")
    return firebase_admin.initialize_app(cred, options)


class FirestoreCollection(Collection):
    def __init__(self, ref):
        self._ref = ref

    def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc_ref = self._ref.document(doc_id)
        except ValueError:
            # ids containing "/" don't name a document in this collection
            logger.info(f"Invalid document id {doc_id!r} in {self._ref.id}")
            return None
        try:
            snapshot = doc_ref.get()
        except google_exceptions.InvalidArgument:
            logger.info(f"Document id {doc_id!r} rejected in {self._ref.id}")
            return None
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"read {self._ref.id}/{doc_id} failed: {e}") from e
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def put(self, doc_id: str, document: Dict[str, Any]) -> None:
        try:
            self._ref.document(doc_id).set(document)
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"write {self._ref.id}/{doc_id} failed: {e}") from e

    def add(self, document: Dict[str, Any]) -> str:
        try:
            _, doc_ref = self._ref.add(document)
        except google_exceptions.GoogleAPIError as e:
            raise StoreError(f"add to {self._ref.id} failed: {e}") from e
        return doc_ref.id


class FirestoreStore(DocumentStore):
    def __init__(self, client=None):
        self._client = client if client is not None else firestore.client(_ensure_app())

    def collection(self, name: str) -> FirestoreCollection:
        return FirestoreCollection(self._client.collection(name))
