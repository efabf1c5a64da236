from datetime import datetime, timezone
from typing import List, Optional

from souq.model.order_schema import Order
from souq.model.store_schema import MerchantStats
from souq.repository import order_repository, product_repository
from souq.repository.document_store import HybridDocumentStore


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def compute_merchant_stats(product_count: int, orders: List[Order], now: Optional[datetime] = None) -> MerchantStats:
    now = _as_utc(now or datetime.now(timezone.utc))
    dated = [(o, _as_utc(o.created_at)) for o in orders if o.created_at]

    return MerchantStats(
        total_products=product_count,
        total_orders=len(orders),
        pending_orders=sum(1 for o in orders if o.status == "pending"),
        total_revenue=round(sum(o.total for o in orders), 2),
        monthly_revenue=round(
            sum(o.total for o, at in dated if at.year == now.year and at.month == now.month), 2
        ),
        today_orders=sum(1 for _, at in dated if at.date() == now.date()),
    )


def get_merchant_stats(docs: HybridDocumentStore, store_id: str) -> MerchantStats:
    products = product_repository.get_products(docs, store_id)
    orders = order_repository.get_orders(docs, store_id)
    return compute_merchant_stats(len(products), orders)
