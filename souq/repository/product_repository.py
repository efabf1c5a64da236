import logging
from typing import List, Optional

from souq.model.product_schema import Product, ProductCreate, ProductUpdate
from souq.repository.document_store import PRODUCTS, HybridDocumentStore, utcnow

logger = logging.getLogger(__name__)


def create_product(docs: HybridDocumentStore, product_data: ProductCreate) -> Product:
    now = utcnow()
    payload = {**product_data.to_document(), "createdAt": now, "updatedAt": now}
    product = Product.model_validate(docs.create(PRODUCTS, payload))
    logger.info("📦 Product created: %s (%s)", product.name, product.id)
    return product


def get_products(
    docs: HybridDocumentStore, store_id: Optional[str] = None, status: Optional[str] = None
) -> List[Product]:
    filters = {}
    if store_id:
        filters["storeId"] = store_id
    if status:
        filters["status"] = status
    rows = docs.query(PRODUCTS, filters=filters or None, order_by="createdAt", descending=True)
    return [Product.model_validate(d) for d in rows]


def get_product_by_id(docs: HybridDocumentStore, product_id: str) -> Optional[Product]:
    doc = docs.get(PRODUCTS, product_id)
    return Product.model_validate(doc) if doc else None


def update_product(docs: HybridDocumentStore, product_id: str, data: ProductUpdate) -> Optional[Product]:
    doc = docs.update(PRODUCTS, product_id, data.to_document(exclude_unset=True))
    return Product.model_validate(doc) if doc else None


def add_product_images(docs: HybridDocumentStore, product: Product, urls: List[str]) -> Optional[Product]:
    doc = docs.update(PRODUCTS, product.id, {"images": [*product.images, *urls]})
    return Product.model_validate(doc) if doc else None


def adjust_stock(docs: HybridDocumentStore, product: Product, delta: int) -> Optional[Product]:
    stock = max(product.stock + delta, 0)
    updates = {"stock": stock}
    if stock == 0 and product.status == "active":
        updates["status"] = "out_of_stock"
    elif stock > 0 and product.status == "out_of_stock":
        updates["status"] = "active"
    doc = docs.update(PRODUCTS, product.id, updates)
    return Product.model_validate(doc) if doc else None


def delete_product(docs: HybridDocumentStore, product_id: str) -> bool:
    deleted = docs.delete(PRODUCTS, product_id)
    if deleted:
        logger.info("🗑️ Product deleted: %s", product_id)
    return deleted
