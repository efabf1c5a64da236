from fastapi import HTTPException

from souq.auth.utils import ensure_store_access
from souq.model.store_schema import Store
from souq.repository import store_repository
from souq.repository.document_store import HybridDocumentStore


def get_store_or_404(docs: HybridDocumentStore, store_id: str) -> Store:
    store = store_repository.get_store_by_id(docs, store_id)
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


def get_managed_store(docs: HybridDocumentStore, store_id: str, user: dict) -> Store:
    """Load a store the current user may modify (404 before 403)."""
    store = get_store_or_404(docs, store_id)
    ensure_store_access(user, store.owner_id)
    return store
