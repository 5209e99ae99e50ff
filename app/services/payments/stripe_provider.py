import logging
from typing import Any, Dict, List, Optional

import stripe

from .base import PaymentsError, PaymentsProvider

logger = logging.getLogger(__name__)


def _to_plain(obj: stripe.StripeObject) -> Dict[str, Any]:
    return obj.to_dict_recursive()


class StripePayments(PaymentsProvider):
    def __init__(self, api_key: str):
        self._api_key = api_key

    def create_session(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            session = stripe.checkout.Session.create(api_key=self._api_key, **params)
        except stripe.StripeError as e:
            logger.error(f"Create stripe session error: {e.user_message or str(e)}")
            raise PaymentsError(str(e)) from e
        logger.info(f"Stripe checkout session created: {session.id}")
        return _to_plain(session)

    def retrieve_session(self, session_id: str, expand: Optional[List[str]] = None) -> Dict[str, Any]:
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                api_key=self._api_key,
                expand=expand or [],
            )
        except stripe.StripeError as e:
            logger.error(f"Retrieve stripe session {session_id} error: {e.user_message or str(e)}")
            raise PaymentsError(str(e)) from e
        return _to_plain(session)
