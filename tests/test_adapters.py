"""Stripe and Firestore adapters against patched SDK entry points."""

from __future__ import annotations

import pytest
import stripe
from google.api_core import exceptions as google_exceptions

from app.services.payments.base import PaymentsError
from app.services.payments.stripe_provider import StripePayments
from app.services.store.base import StoreError
from app.services.store.firestore import FirestoreStore
from tests.conftest import FakeFirestoreClient

API_KEY = "sk_test_adapter"

SESSION = {
    "id": "cs_test_abc",
    "object": "checkout.session",
    "payment_status": "paid",
    "line_items": {
        "object": "list",
        "data": [{"object": "item", "description": "Bag | Black", "quantity": 2}],
    },
}


def _session_object():
    return stripe.checkout.Session.construct_from(SESSION, API_KEY)


class TestStripePayments:
    def test_create_passes_params_and_key(self, monkeypatch):
        calls = []

        def fake_create(**kwargs):
            calls.append(kwargs)
            return _session_object()

        monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
        session = StripePayments(API_KEY).create_session({"mode": "payment", "line_items": []})

        assert calls == [{"api_key": API_KEY, "mode": "payment", "line_items": []}]
        assert session["id"] == "cs_test_abc"

    def test_create_error_becomes_payments_error(self, monkeypatch):
        def fake_create(**kwargs):
            raise stripe.APIConnectionError("network down")

        monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
        with pytest.raises(PaymentsError):
            StripePayments(API_KEY).create_session({"mode": "payment"})

    def test_retrieve_requests_expansion(self, monkeypatch):
        calls = []

        def fake_retrieve(session_id, **kwargs):
            calls.append((session_id, kwargs))
            return _session_object()

        monkeypatch.setattr(stripe.checkout.Session, "retrieve", fake_retrieve)
        StripePayments(API_KEY).retrieve_session("cs_test_abc", expand=["line_items"])

        assert calls == [("cs_test_abc", {"api_key": API_KEY, "expand": ["line_items"]})]

    def test_retrieve_returns_plain_dicts(self, monkeypatch):
        monkeypatch.setattr(stripe.checkout.Session, "retrieve", lambda session_id, **kw: _session_object())
        session = StripePayments(API_KEY).retrieve_session("cs_test_abc", expand=["line_items"])

        assert type(session) is dict
        assert type(session["line_items"]) is dict
        assert type(session["line_items"]["data"][0]) is dict
        assert session == SESSION

    def test_retrieve_error_becomes_payments_error(self, monkeypatch):
        def fake_retrieve(session_id, **kwargs):
            raise stripe.InvalidRequestError("No such checkout.session", "id")

        monkeypatch.setattr(stripe.checkout.Session, "retrieve", fake_retrieve)
        with pytest.raises(PaymentsError):
            StripePayments(API_KEY).retrieve_session("cs_missing")


class TestFirestoreStore:
    def setup_method(self):
        self.client = FakeFirestoreClient()
        self.store = FirestoreStore(client=self.client)

    def test_put_then_get(self):
        self.store.collection("orders").put("cs_1", {"id": "cs_1"})
        assert self.store.collection("orders").get("cs_1") == {"id": "cs_1"}

    def test_missing_document(self):
        assert self.store.collection("products").get("nope") is None

    def test_add_returns_generated_id(self):
        doc_id = self.store.collection("emails").add({"email": "a@b.com"})
        assert self.client.collection("emails").docs[doc_id] == {"email": "a@b.com"}

    def test_path_like_id_is_missing(self):
        assert self.store.collection("products").get("a/b") is None

    def test_id_rejected_by_server_is_missing(self):
        self.client.collection("products").rejected_ids.add("__x__")
        assert self.store.collection("products").get("__x__") is None

    @pytest.mark.parametrize("op", ["get", "put", "add"])
    def test_outage_becomes_store_error(self, op):
        self.client.collection("orders").error = google_exceptions.ServiceUnavailable("down")
        orders = self.store.collection("orders")
        with pytest.raises(StoreError):
            if op == "get":
                orders.get("cs_1")
            elif op == "put":
                orders.put("cs_1", {})
            else:
                orders.add({})
