import threading
import uuid
from copy import deepcopy
from typing import Any, Dict, Optional

from .base import Collection, DocumentStore


class MemoryCollection(Collection):
    def __init__(self):
        self._docs: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._docs.get(doc_id)
        return deepcopy(doc) if doc is not None else None

    def put(self, doc_id: str, document: Dict[str, Any]) -> None:
        with self._lock:
            self._docs[doc_id] = deepcopy(document)

    def add(self, document: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self.put(doc_id, document)
        return doc_id

    def all(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return deepcopy(self._docs)


class MemoryStore(DocumentStore):
    """process-local store for dev runs and tests."""

    def __init__(self):
        self._collections: Dict[str, MemoryCollection] = {}
        self._lock = threading.Lock()

    def collection(self, name: str) -> MemoryCollection:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = MemoryCollection()
            return self._collections[name]
