import uuid
from copy import deepcopy
from typing import Any, Dict, List, Optional

from .base import PaymentsError, PaymentsProvider


class MockPayments(PaymentsProvider):
    """in-process provider mimicking checkout session create/retrieve."""

    def __init__(self):
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.created: List[Dict[str, Any]] = []
        self.fail_create: bool = False
        self.fail_retrieve: bool = False

    def create_session(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.fail_create:
            raise PaymentsError("mock create failure")
        session_id = f"cs_test_{uuid.uuid4().hex}"
        line_items = [
            {
                "object": "item",
                "description": li.get("description"),
                "quantity": li.get("quantity"),
                "amount_total": li["price_data"]["unit_amount"] * li.get("quantity", 1),
                "currency": li["price_data"]["currency"],
            }
            for li in params.get("line_items", [])
        ]
        session = {
            "id": session_id,
            "object": "checkout.session",
            "mode": params.get("mode"),
            "status": "open",
            "payment_status": "unpaid",
            "url": f"https://pay.example.test/checkout/{session_id}",
            "success_url": params.get("success_url"),
            "cancel_url": params.get("cancel_url"),
            "amount_total": sum(li["amount_total"] for li in line_items),
            "line_items": {"object": "list", "data": line_items},
        }
        self.created.append(deepcopy(params))
        self.sessions[session_id] = session
        return self._render(session, expand=None)

    def retrieve_session(self, session_id: str, expand: Optional[List[str]] = None) -> Dict[str, Any]:
        if self.fail_retrieve:
            raise PaymentsError("mock retrieve failure")
        session = self.sessions.get(session_id)
        if session is None:
            raise PaymentsError(f"No such checkout.session: '{session_id}'")
        return self._render(session, expand=expand)

    def complete(self, session_id: str) -> None:
        """mark a session paid, as the hosted checkout would."""
        self.sessions[session_id].update(status="complete", payment_status="paid")

    @staticmethod
    def _render(session: Dict[str, Any], expand: Optional[List[str]]) -> Dict[str, Any]:
        out = deepcopy(session)
        if "line_items" not in (expand or []):
            out.pop("line_items", None)
        return out
