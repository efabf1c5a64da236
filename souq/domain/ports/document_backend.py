from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


class DocumentBackendPort(ABC):
    """A collection-of-JSON-documents store. Returned documents carry their id under "id"."""

    name: str = "backend"

    @abstractmethod
    def add(self, collection: str, data: Document) -> Document:
        """Insert a document under a newly assigned id."""
        raise NotImplementedError

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Document) -> Document:
        """Create or overwrite the document with the given id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        """Equality-filtered listing."""
        raise NotImplementedError

    @abstractmethod
    def update(self, collection: str, doc_id: str, updates: Document) -> Optional[Document]:
        """Shallow-merge updates into an existing document; None when it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        raise NotImplementedError
