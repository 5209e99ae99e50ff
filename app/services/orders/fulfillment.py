"""Order fulfillment for verified payment webhooks.

Each delivery ends in one of four outcomes:

    rejected        signature check failed, respond 400
    ignored         verified, but not an event we act on, respond 200
    fulfilled       expanded session written to orders/<session id>
    fulfill_failed  provider or store call failed, logged and recorded

Failures after verification still answer 200 so the provider stops
redelivering; the failure record is the local trail for replaying them.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from app.schemas.events import CHECKOUT_SESSION_COMPLETED, WebhookEvent
from app.services.payments.base import PaymentsError, PaymentsProvider
from app.services.payments.signature import DEFAULT_TOLERANCE, VerificationError, verify
from app.services.store.base import DocumentStore, StoreError

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    REJECTED = "rejected"
    IGNORED = "ignored"
    FULFILLED = "fulfilled"
    FULFILL_FAILED = "fulfill_failed"


@dataclass
class FulfillmentResult:
    outcome: Outcome
    event_type: Optional[str] = None
    session_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def status_code(self) -> int:
        return 400 if self.outcome is Outcome.REJECTED else 200


class OrderFulfillment:
    def __init__(
        self,
        payments: PaymentsProvider,
        store: DocumentStore,
        webhook_secret: str,
        orders_collection: str = "orders",
        failures_collection: str = "failed_fulfillments",
        tolerance: int = DEFAULT_TOLERANCE,
    ):
        self.payments = payments
        self.store = store
        self.webhook_secret = webhook_secret
        self.orders_collection = orders_collection
        self.failures_collection = failures_collection
        self.tolerance = tolerance

    def handle(self, raw_body: bytes, signature_header: Optional[str]) -> FulfillmentResult:
        try:
            event = verify(raw_body, signature_header, self.webhook_secret, self.tolerance)
        except VerificationError as e:
            logger.warning(f"Construct Event Failed. Error: {e}")
            return FulfillmentResult(Outcome.REJECTED, error=str(e))

        if event.type != CHECKOUT_SESSION_COMPLETED:
            logger.info(f"Ignoring webhook event {event.id} of type {event.type}")
            return FulfillmentResult(Outcome.IGNORED, event_type=event.type)

        return self.fulfill(event)

    def fulfill(self, event: WebhookEvent) -> FulfillmentResult:
        session_id = event.session_id
        logger.info(f"Fulfilling order for session {session_id}")

        try:
            # the event payload omits line items, so fetch them explicitly
            expanded = self.payments.retrieve_session(session_id, expand=["line_items"])
        except PaymentsError as e:
            return self._failed(event, "retrieve", e)
        except Exception as e:
            logger.exception(f"Unexpected error retrieving session {session_id}")
            return self._failed(event, "retrieve", e)

        try:
            self.store.collection(self.orders_collection).put(session_id, expanded)
        except StoreError as e:
            return self._failed(event, "persist", e)
        except Exception as e:
            logger.exception(f"Unexpected error saving order {session_id}")
            return self._failed(event, "persist", e)

        logger.info(f"Order {session_id} saved")
        return FulfillmentResult(Outcome.FULFILLED, event_type=event.type, session_id=session_id)

    def _failed(self, event: WebhookEvent, stage: str, err: Exception) -> FulfillmentResult:
        session_id = event.session_id
        logger.error(f"Fulfill Order Error ({stage}) for session {session_id}: {err}")
        record: Dict[str, Any] = {
            "sessionId": session_id,
            "eventId": event.id,
            "stage": stage,
            "error": str(err),
            "failedAt": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.store.collection(self.failures_collection).add(record)
        except Exception as e:
            logger.error(f"Could not record failed fulfillment for session {session_id}: {e}")
        return FulfillmentResult(
            Outcome.FULFILL_FAILED,
            event_type=event.type,
            session_id=session_id,
            error=str(err),
        )
