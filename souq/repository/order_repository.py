import logging
import time
from typing import List, Optional

from souq.model.order_schema import Order, OrderCreate, OrderStatusUpdate
from souq.repository.document_store import ORDERS, HybridDocumentStore, utcnow

logger = logging.getLogger(__name__)


def create_order(docs: HybridDocumentStore, data: OrderCreate) -> Order:
    now = utcnow()
    payload = {
        **data.to_document(),
        "orderNumber": f"ORD-{int(time.time() * 1000)}",
        "createdAt": now,
        "updatedAt": now,
    }
    order = Order.model_validate(docs.create(ORDERS, payload))
    logger.info("🧾 Order created: %s for store %s", order.order_number, order.store_id)
    return order


def get_orders(docs: HybridDocumentStore, store_id: Optional[str] = None, status: Optional[str] = None) -> List[Order]:
    filters = {}
    if store_id:
        filters["storeId"] = store_id
    if status:
        filters["status"] = status
    rows = docs.query(ORDERS, filters=filters or None, order_by="createdAt", descending=True)
    return [Order.model_validate(d) for d in rows]


def get_order_by_id(docs: HybridDocumentStore, order_id: str) -> Optional[Order]:
    doc = docs.get(ORDERS, order_id)
    return Order.model_validate(doc) if doc else None


def update_order_status(docs: HybridDocumentStore, order_id: str, data: OrderStatusUpdate) -> Optional[Order]:
    doc = docs.update(ORDERS, order_id, data.to_document(exclude_unset=True))
    if not doc:
        return None
    logger.info("✅ Order status updated: %s -> %s", order_id, data.status)
    return Order.model_validate(doc)
