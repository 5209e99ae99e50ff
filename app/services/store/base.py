from typing import Any, Dict, Optional


class StoreError(Exception):
    """raised when the document store fails to read or write."""


class Collection:
    """a named group of documents addressed by string id."""

    def get(self, doc_id: str) -> Optional[Dict[str, Any]]:  # pragma: no cover
        raise NotImplementedError

    def put(self, doc_id: str, document: Dict[str, Any]) -> None:  # pragma: no cover
        raise NotImplementedError

    def add(self, document: Dict[str, Any]) -> str:  # pragma: no cover
        raise NotImplementedError


class DocumentStore:
    """base document store interface."""

    def collection(self, name: str) -> Collection:  # pragma: no cover
        raise NotImplementedError
