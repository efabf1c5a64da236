from typing import Optional

from souq.model.base_schema import DocumentModel


class CategoryCreate(DocumentModel):
    store_id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[str] = None
    sort: int = 0
    is_active: bool = True


class Category(CategoryCreate):
    id: str


class CategoryUpdate(DocumentModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[str] = None
    sort: Optional[int] = None
    is_active: Optional[bool] = None
