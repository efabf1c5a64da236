from datetime import datetime
from typing import Optional

from souq.model.base_schema import DocumentModel


class CustomerCreate(DocumentModel):
    store_id: str
    name: str
    email: str
    phone: str = ""
    is_active: bool = True
    total_orders: int = 0
    total_spent: float = 0
    last_order_date: Optional[datetime] = None


class Customer(CustomerCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CustomerUpdate(DocumentModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None
