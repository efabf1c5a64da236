from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field

from souq.model.base_schema import DocumentModel

ProductStatus = Literal["active", "inactive", "out_of_stock"]


class ProductVariant(DocumentModel):
    id: str
    name: str
    options: Dict[str, str] = Field(default_factory=dict)
    price: Optional[float] = None
    sku: Optional[str] = None
    stock: Optional[int] = None
    image: Optional[str] = None


class ProductCreate(DocumentModel):
    store_id: str
    name: str
    description: str = ""
    price: float = Field(ge=0)
    original_price: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    category: str = ""
    sub_category: Optional[str] = None
    brand: Optional[str] = None
    sku: str = ""
    stock: int = Field(0, ge=0)
    specifications: Dict[str, str] = Field(default_factory=dict)
    variants: List[ProductVariant] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    rating: float = 0
    review_count: int = 0
    status: ProductStatus = "active"
    featured: bool = False


class Product(ProductCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductUpdate(DocumentModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = None
    images: Optional[List[str]] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    brand: Optional[str] = None
    sku: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    specifications: Optional[Dict[str, str]] = None
    variants: Optional[List[ProductVariant]] = None
    tags: Optional[List[str]] = None
    status: Optional[ProductStatus] = None
    featured: Optional[bool] = None
