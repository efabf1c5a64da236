from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter
from google.cloud.firestore import Query

from souq.domain.ports.document_backend import Document, DocumentBackendPort
from souq.infra.sql_backend import sort_documents


def _snapshot_to_document(snapshot) -> Document:
    return {**(snapshot.to_dict() or {}), "id": snapshot.id}


class FirestoreBackend(DocumentBackendPort):
    name = "firestore"

    def __init__(self, client):
        self.client = client

    def add(self, collection: str, data: Document) -> Document:
        payload = {k: v for k, v in data.items() if k != "id"}
        _, ref = self.client.collection(collection).add(payload)
        return _snapshot_to_document(ref.get())

    def set(self, collection: str, doc_id: str, data: Document) -> Document:
        ref = self.client.collection(collection).document(doc_id)
        ref.set({k: v for k, v in data.items() if k != "id"})
        return _snapshot_to_document(ref.get())

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snapshot = self.client.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return _snapshot_to_document(snapshot)

    def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        query = self.client.collection(collection)
        for field, value in (filters or {}).items():
            query = query.where(filter=FieldFilter(field, "==", value))

        # filter + order_by needs a composite index, so filtered queries sort client side
        if order_by and not filters:
            direction = Query.DESCENDING if descending else Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
            if limit is not None:
                query = query.limit(limit)
            return [_snapshot_to_document(s) for s in query.stream()]

        docs = [_snapshot_to_document(s) for s in query.stream()]
        if order_by:
            docs = sort_documents(docs, order_by, descending)
        if limit is not None:
            docs = docs[:limit]
        return docs

    def update(self, collection: str, doc_id: str, updates: Document) -> Optional[Document]:
        ref = self.client.collection(collection).document(doc_id)
        if not ref.get().exists:
            return None
        ref.update(updates)
        return _snapshot_to_document(ref.get())

    def delete(self, collection: str, doc_id: str) -> bool:
        ref = self.client.collection(collection).document(doc_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True
