"""Webhook signature verification for payment provider events.

The provider signs ``"<timestamp>.<raw body>"`` with the endpoint secret and
sends ``Stripe-Signature: t=<timestamp>,v1=<hex digest>``. Verification must
run on the exact bytes received; re-serialising the JSON breaks the digest.
"""
import json
import logging
from typing import Optional

import stripe
from pydantic import ValidationError

from app.schemas.events import WebhookEvent

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 300


class VerificationError(Exception):
    """raised when a webhook payload can't be trusted or understood."""


def verify(
    raw_body: bytes,
    signature_header: Optional[str],
    secret: str,
    tolerance: int = DEFAULT_TOLERANCE,
) -> WebhookEvent:
    """
    Verify a webhook delivery and parse it into an event.

    Args:
        raw_body: Request body bytes, unparsed
        signature_header: Value of the Stripe-Signature header
        secret: Endpoint signing secret
        tolerance: Max age of the signed timestamp in seconds

    Returns:
        The verified WebhookEvent

    Raises:
        VerificationError: bad, missing or expired signature, or a payload
            that is not a recognizable event
    """
    if not secret:
        # fail closed
        raise VerificationError("Webhook secret not configured")
    if not signature_header:
        raise VerificationError("Missing signature header")

    try:
        payload = raw_body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise VerificationError("Payload is not valid UTF-8") from e

    try:
        stripe.WebhookSignature.verify_header(payload, signature_header, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        raise VerificationError(str(e)) from e

    try:
        return WebhookEvent.model_validate(json.loads(payload))
    except (ValueError, ValidationError) as e:
        raise VerificationError(f"Invalid event payload: {e}") from e
