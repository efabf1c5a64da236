"""Firestore-first document access with a local fallback.

Every call tries the primary backend. Any exception it raises is logged and
the same operation is served from the local store instead. Successful
primary reads and writes are mirrored into the local store so the fallback
stays warm.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from souq.db.firestore import get_firestore_client
from souq.db.session import get_db
from souq.domain.ports.document_backend import Document, DocumentBackendPort
from souq.infra.firestore_backend import FirestoreBackend
from souq.infra.sql_backend import SqlDocumentBackend

logger = logging.getLogger(__name__)

STORES = "stores"
PRODUCTS = "products"
CATEGORIES = "categories"
ORDERS = "orders"
CUSTOMERS = "customers"
STORE_APPLICATIONS = "storeApplications"

PROTECTED_FIELDS = ("id", "createdAt")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HybridDocumentStore:
    def __init__(self, local: DocumentBackendPort, primary: Optional[DocumentBackendPort] = None):
        self.local = local
        self.primary = primary
        self.last_source = local.name

    @property
    def primary_enabled(self) -> bool:
        return self.primary is not None

    def _run(self, action: str, collection: str, primary_call: Callable, fallback_call: Callable):
        if self.primary is None:
            self.last_source = self.local.name
            return fallback_call()
        try:
            result = primary_call()
            self.last_source = self.primary.name
            return result
        except Exception as e:
            logger.error("❌ Error %s %s in %s: %s", action, collection, self.primary.name, e)
            logger.info("🔄 Falling back to %s store for %s...", self.local.name, collection)
            self.last_source = self.local.name
            return fallback_call()

    def _mirror(self, collection: str, doc: Optional[Document]):
        if doc is None or self.primary is None:
            return
        try:
            self.local.set(collection, doc["id"], doc)
        except Exception as e:
            logger.warning("⚠️ Could not mirror %s/%s locally: %s", collection, doc.get("id"), e)

    def create(self, collection: str, data: Document) -> Document:
        def primary_create():
            doc = self.primary.add(collection, data)
            logger.info("✅ Created %s/%s in %s", collection, doc["id"], self.primary.name)
            self._mirror(collection, doc)
            return doc

        def local_create():
            doc = self.local.add(collection, data)
            logger.info("✅ Created %s/%s locally", collection, doc["id"])
            return doc

        return self._run("creating", collection, primary_create, local_create)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        def primary_get():
            doc = self.primary.get(collection, doc_id)
            if doc is None:
                logger.info("❌ %s/%s not found in %s", collection, doc_id, self.primary.name)
            return doc

        return self._run("fetching", collection, primary_get, lambda: self.local.get(collection, doc_id))

    def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        def primary_query():
            docs = self.primary.query(collection, filters, order_by, descending, limit)
            logger.debug("✅ Fetched %d %s from %s", len(docs), collection, self.primary.name)
            for doc in docs:
                self._mirror(collection, doc)
            return docs

        def local_query():
            return self.local.query(collection, filters, order_by, descending, limit)

        return self._run("fetching", collection, primary_query, local_query)

    def first(self, collection: str, field: str, value: Any) -> Optional[Document]:
        docs = self.query(collection, filters={field: value}, limit=1)
        return docs[0] if docs else None

    def update(self, collection: str, doc_id: str, updates: Document) -> Optional[Document]:
        payload = {k: v for k, v in updates.items() if k not in PROTECTED_FIELDS}
        payload["updatedAt"] = utcnow()

        def primary_update():
            doc = self.primary.update(collection, doc_id, payload)
            self._mirror(collection, doc)
            return doc

        return self._run(
            "updating", collection, primary_update, lambda: self.local.update(collection, doc_id, payload)
        )

    def delete(self, collection: str, doc_id: str) -> bool:
        def primary_delete():
            deleted = self.primary.delete(collection, doc_id)
            self.local.delete(collection, doc_id)
            return deleted

        return self._run("deleting", collection, primary_delete, lambda: self.local.delete(collection, doc_id))

    def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        return len(self.query(collection, filters=filters))


def build_document_store(db: Session) -> HybridDocumentStore:
    client = get_firestore_client()
    primary = FirestoreBackend(client) if client is not None else None
    return HybridDocumentStore(local=SqlDocumentBackend(db), primary=primary)


def get_document_store(db: Session = Depends(get_db)) -> HybridDocumentStore:
    return build_document_store(db)
