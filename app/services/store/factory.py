from functools import lru_cache

from app.core.config import settings
from .base import DocumentStore
from .memory import MemoryStore


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    provider = settings.STORE_PROVIDER.lower()
    if provider == "memory":
        return MemoryStore()
    # imported lazily so dev runs on the memory store need no credentials
    from .firestore import FirestoreStore

    return FirestoreStore()
