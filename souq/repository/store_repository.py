import logging
from typing import List, Optional

from souq.model.store_schema import Store, StoreCreate, StoreCustomization, StoreUpdate
from souq.repository.document_store import STORES, HybridDocumentStore, utcnow

logger = logging.getLogger(__name__)


def create_store(docs: HybridDocumentStore, store_data: StoreCreate) -> Store:
    logger.info("🏪 Creating store: %s (%s)", store_data.name, store_data.subdomain)
    now = utcnow()
    payload = {**store_data.to_document(), "createdAt": now, "updatedAt": now}
    return Store.model_validate(docs.create(STORES, payload))


def get_stores(docs: HybridDocumentStore, status: Optional[str] = None) -> List[Store]:
    filters = {"status": status} if status else None
    return [Store.model_validate(d) for d in docs.query(STORES, filters=filters, order_by="createdAt", descending=True)]


def get_store_by_id(docs: HybridDocumentStore, store_id: str) -> Optional[Store]:
    doc = docs.get(STORES, store_id)
    return Store.model_validate(doc) if doc else None


def get_store_by_owner(docs: HybridDocumentStore, owner_id: str) -> Optional[Store]:
    doc = docs.first(STORES, "ownerId", owner_id)
    if not doc:
        logger.info("❌ No store found for owner: %s", owner_id)
        return None
    return Store.model_validate(doc)


def get_store_by_subdomain(docs: HybridDocumentStore, subdomain: str) -> Optional[Store]:
    doc = docs.first(STORES, "subdomain", subdomain)
    return Store.model_validate(doc) if doc else None


def update_store(docs: HybridDocumentStore, store_id: str, data: StoreUpdate) -> Optional[Store]:
    doc = docs.update(STORES, store_id, data.to_document(exclude_unset=True))
    if not doc:
        return None
    logger.info("✅ Store updated: %s", store_id)
    return Store.model_validate(doc)


def update_customization(
    docs: HybridDocumentStore, store_id: str, customization: StoreCustomization
) -> Optional[Store]:
    doc = docs.update(STORES, store_id, {"customization": customization.to_document()})
    return Store.model_validate(doc) if doc else None


def set_store_fields(docs: HybridDocumentStore, store_id: str, **fields) -> Optional[Store]:
    doc = docs.update(STORES, store_id, fields)
    return Store.model_validate(doc) if doc else None
