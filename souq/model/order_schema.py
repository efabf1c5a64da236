from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from souq.model.base_schema import DocumentModel

OrderStatus = Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid", "failed", "refunded"]


class Address(DocumentModel):
    first_name: str
    last_name: str = ""
    email: str
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = "SA"


class OrderItem(DocumentModel):
    product_id: str
    product_name: str
    product_image: str = ""
    variant_id: Optional[str] = None
    variant_name: Optional[str] = None
    price: float
    quantity: int
    total: float


class Tracking(DocumentModel):
    tracking_number: str
    courier: str
    tracking_url: str = ""


class OrderCreate(DocumentModel):
    store_id: str
    customer_id: str
    items: List[OrderItem]
    subtotal: float
    tax_amount: float = 0
    shipping_cost: float = 0
    discount_amount: float = 0
    total: float
    status: OrderStatus = "pending"
    payment_method: str = "cash_on_delivery"
    payment_status: PaymentStatus = "pending"
    shipping_address: Address
    billing_address: Address
    tracking: Optional[Tracking] = None
    notes: Optional[str] = None


class Order(OrderCreate):
    id: str
    order_number: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderStatusUpdate(DocumentModel):
    status: OrderStatus
    payment_status: Optional[PaymentStatus] = None
    tracking: Optional[Tracking] = None


class CartLine(DocumentModel):
    product_id: str
    quantity: int
    variant_id: Optional[str] = None


class CartRequest(DocumentModel):
    items: List[CartLine] = Field(default_factory=list)


class CartQuote(DocumentModel):
    items: List[OrderItem]
    item_count: int
    subtotal: float
    tax_amount: float
    shipping_cost: float
    discount_amount: float
    total: float
    currency: str


class CheckoutRequest(CartRequest):
    customer_name: Optional[str] = None
    payment_method: str = "cash_on_delivery"
    shipping_address: Address
    billing_address: Optional[Address] = None
    notes: Optional[str] = None
