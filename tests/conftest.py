"""Shared fixtures: in-memory store, mock payments, signed webhook bodies."""

from __future__ import annotations

import hashlib
import hmac
import json
import os
import time

os.environ.setdefault("STORE_PROVIDER", "memory")
os.environ.setdefault("PAYMENTS_PROVIDER", "mock")
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.payments.factory import get_payments
from app.services.payments.mock import MockPayments
from app.services.store.factory import get_store
from app.services.store.memory import MemoryStore

WEBHOOK_SECRET = "whsec_test_secret"


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header value for payload."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def event_body(event_type: str, obj: dict, event_id: str = "evt_test_1") -> bytes:
    return json.dumps({"id": event_id, "object": "event", "type": event_type, "data": {"object": obj}}).encode()


@pytest.fixture()
def store() -> MemoryStore:
    store = MemoryStore()
    products = store.collection("products")
    products.put("p1", {"name": "Bag", "price": "50", "imageUrls": ["u1"], "colorName": "Black"})
    products.put("p2", {"name": "Sleeve", "price": "30", "salePrice": "24.99", "imageUrls": ["u2", "u3"]})
    products.put("p3", {"name": "Strap", "Price": 12.5, "imageUrls": []})
    return store


@pytest.fixture()
def payments() -> MockPayments:
    return MockPayments()


@pytest.fixture()
def client(store: MemoryStore, payments: MockPayments):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_payments] = lambda: payments
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class FakeSnapshot:
    def __init__(self, data: dict | None):
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, collection: "FakeCollectionRef", doc_id: str):
        self._collection = collection
        self.id = doc_id

    def get(self):
        self._collection.maybe_fail(self.id)
        return FakeSnapshot(self._collection.docs.get(self.id))

    def set(self, document: dict):
        self._collection.maybe_fail(self.id)
        self._collection.docs[self.id] = dict(document)


class FakeCollectionRef:
    """Mimics google.cloud.firestore.CollectionReference path handling."""

    def __init__(self, name: str):
        self.id = name
        self.docs: dict = {}
        self.error: Exception | None = None
        self.rejected_ids: set = set()
        self._next = 0

    def maybe_fail(self, doc_id: str) -> None:
        from google.api_core import exceptions as google_exceptions

        if doc_id in self.rejected_ids:
            raise google_exceptions.InvalidArgument(f"invalid document id {doc_id}")
        if self.error is not None:
            raise self.error

    def document(self, doc_id: str) -> FakeDocumentRef:
        if "/" in doc_id:
            raise ValueError("A document must have an even number of path elements")
        return FakeDocumentRef(self, doc_id)

    def add(self, document: dict):
        self._next += 1
        ref = FakeDocumentRef(self, f"auto{self._next}")
        ref.set(document)
        return None, ref


class FakeFirestoreClient:
    def __init__(self):
        self.collections: dict = {}

    def collection(self, name: str) -> FakeCollectionRef:
        return self.collections.setdefault(name, FakeCollectionRef(name))
