from typing import List, Literal, Optional

from pydantic import Field

from souq.model.base_schema import DocumentModel
from souq.model.category_schema import Category
from souq.model.product_schema import Product
from souq.model.store_schema import Store


ProductSort = Literal["newest", "price_low", "price_high", "rating", "popularity"]


class ProductFilter(DocumentModel):
    search: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    sort_by: ProductSort = "newest"


class StorefrontView(DocumentModel):
    requested: str
    matched_by: str
    store: Store
    categories: List[Category] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    featured_products: List[Product] = Field(default_factory=list)
    filters: ProductFilter = Field(default_factory=ProductFilter)


class StoreDirectoryEntry(DocumentModel):
    id: str
    name: str
    subdomain: str
    status: str
