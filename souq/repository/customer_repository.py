from typing import List, Optional

from souq.model.customer_schema import Customer, CustomerCreate, CustomerUpdate
from souq.repository.document_store import CUSTOMERS, HybridDocumentStore, utcnow


def create_customer(docs: HybridDocumentStore, data: CustomerCreate) -> Customer:
    now = utcnow()
    payload = {**data.to_document(), "createdAt": now, "updatedAt": now}
    return Customer.model_validate(docs.create(CUSTOMERS, payload))


def get_customers(docs: HybridDocumentStore, store_id: Optional[str] = None) -> List[Customer]:
    filters = {"storeId": store_id} if store_id else None
    rows = docs.query(CUSTOMERS, filters=filters, order_by="createdAt", descending=True)
    return [Customer.model_validate(d) for d in rows]


def get_customer_by_id(docs: HybridDocumentStore, customer_id: str) -> Optional[Customer]:
    doc = docs.get(CUSTOMERS, customer_id)
    return Customer.model_validate(doc) if doc else None


def get_customer_by_email(docs: HybridDocumentStore, store_id: str, email: str) -> Optional[Customer]:
    email = email.strip().lower()
    for customer in get_customers(docs, store_id):
        if customer.email.strip().lower() == email:
            return customer
    return None


def update_customer(docs: HybridDocumentStore, customer_id: str, data: CustomerUpdate) -> Optional[Customer]:
    doc = docs.update(CUSTOMERS, customer_id, data.to_document(exclude_unset=True))
    return Customer.model_validate(doc) if doc else None


def record_purchase(docs: HybridDocumentStore, customer: Customer, amount: float) -> Optional[Customer]:
    doc = docs.update(
        CUSTOMERS,
        customer.id,
        {
            "totalOrders": customer.total_orders + 1,
            "totalSpent": round(customer.total_spent + amount, 2),
            "lastOrderDate": utcnow(),
        },
    )
    return Customer.model_validate(doc) if doc else None
