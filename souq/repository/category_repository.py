from typing import List, Optional

from souq.model.category_schema import Category, CategoryCreate, CategoryUpdate
from souq.repository.document_store import CATEGORIES, HybridDocumentStore


def create_category(docs: HybridDocumentStore, data: CategoryCreate) -> Category:
    return Category.model_validate(docs.create(CATEGORIES, data.to_document()))


def get_categories(
    docs: HybridDocumentStore, store_id: Optional[str] = None, active_only: bool = False
) -> List[Category]:
    filters = {}
    if store_id:
        filters["storeId"] = store_id
    if active_only:
        filters["isActive"] = True
    rows = docs.query(CATEGORIES, filters=filters or None, order_by="sort")
    return [Category.model_validate(d) for d in rows]


def get_category_by_id(docs: HybridDocumentStore, category_id: str) -> Optional[Category]:
    doc = docs.get(CATEGORIES, category_id)
    return Category.model_validate(doc) if doc else None


def update_category(docs: HybridDocumentStore, category_id: str, data: CategoryUpdate) -> Optional[Category]:
    updates = data.to_document(exclude_unset=True)
    doc = docs.update(CATEGORIES, category_id, updates)
    return Category.model_validate(doc) if doc else None


def delete_category(docs: HybridDocumentStore, category_id: str) -> bool:
    return docs.delete(CATEGORIES, category_id)
