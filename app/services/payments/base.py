from typing import Any, Dict, List, Optional


class PaymentsError(Exception):
    """raised when a payment provider call fails."""


class PaymentsProvider:
    """base payments provider interface."""

    def create_session(self, params: Dict[str, Any]) -> Dict[str, Any]:  # pragma: no cover
        raise NotImplementedError

    def retrieve_session(self, session_id: str, expand: Optional[List[str]] = None) -> Dict[str, Any]:  # pragma: no cover
        raise NotImplementedError
