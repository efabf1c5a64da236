import json
import logging
import time
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from souq.domain.ports.document_backend import Document, DocumentBackendPort
from souq.model.document import LocalDocument

logger = logging.getLogger(__name__)

ID_PREFIXES = {
    "stores": "store",
    "products": "product",
    "categories": "category",
    "orders": "order",
    "customers": "customer",
    "storeApplications": "app",
}


def new_local_id(collection: str) -> str:
    prefix = ID_PREFIXES.get(collection, "doc")
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _json_default(value: Any):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def normalize(data: Document) -> Document:
    """Round-trip through JSON so the row holds only JSON types."""
    return json.loads(json.dumps(data, default=_json_default))


def sort_documents(docs: List[Document], order_by: str, descending: bool = False) -> List[Document]:
    present = [d for d in docs if d.get(order_by) is not None]
    missing = [d for d in docs if d.get(order_by) is None]
    present.sort(key=lambda d: d[order_by], reverse=descending)
    return present + missing


def _to_document(row: LocalDocument) -> Document:
    return {**row.data, "id": row.doc_id}


class SqlDocumentBackend(DocumentBackendPort):
    """Local fallback store: one JSON row per document in `local_documents`."""

    name = "local"

    def __init__(self, db: Session):
        self.db = db

    def add(self, collection: str, data: Document) -> Document:
        return self.set(collection, new_local_id(collection), data)

    def set(self, collection: str, doc_id: str, data: Document) -> Document:
        payload = normalize({k: v for k, v in data.items() if k != "id"})
        row = self.db.get(LocalDocument, (collection, doc_id))
        if row is None:
            row = LocalDocument(collection=collection, doc_id=doc_id, data=payload)
            self.db.add(row)
        else:
            row.data = payload
        self.db.commit()
        self.db.refresh(row)
        return _to_document(row)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        row = self.db.get(LocalDocument, (collection, doc_id))
        return _to_document(row) if row else None

    def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        rows = self.db.query(LocalDocument).filter(LocalDocument.collection == collection).all()
        docs = [_to_document(row) for row in rows]

        if filters:
            expected = normalize(filters)
            docs = [d for d in docs if all(d.get(k) == v for k, v in expected.items())]
        if order_by:
            docs = sort_documents(docs, order_by, descending)
        if limit is not None:
            docs = docs[:limit]
        return docs

    def update(self, collection: str, doc_id: str, updates: Document) -> Optional[Document]:
        row = self.db.get(LocalDocument, (collection, doc_id))
        if row is None:
            return None
        # reassign so SQLAlchemy sees the JSON column change
        row.data = {**row.data, **normalize(updates)}
        self.db.commit()
        self.db.refresh(row)
        return _to_document(row)

    def delete(self, collection: str, doc_id: str) -> bool:
        row = self.db.get(LocalDocument, (collection, doc_id))
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True
