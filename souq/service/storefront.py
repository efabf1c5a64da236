"""Storefront: store resolution, catalog view, cart pricing and checkout.

A storefront URL carries either a subdomain or a store id, and during
merchant preview the store may not be visible yet under the exact key that
was requested. Resolution therefore walks an ordered list of lookups and
reports which one matched.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from souq.core.config import settings
from souq.model.category_schema import Category
from souq.model.customer_schema import Customer, CustomerCreate
from souq.model.order_schema import (
    CartLine,
    CartQuote,
    CartRequest,
    CheckoutRequest,
    Order,
    OrderCreate,
    OrderItem,
)
from souq.model.product_schema import Product
from souq.model.store_schema import Store
from souq.model.storefront_schema import ProductFilter, StorefrontView
from souq.repository import category_repository, customer_repository, order_repository, product_repository
from souq.repository.document_store import HybridDocumentStore
from souq.repository.store_repository import get_stores
from souq.service.sync import wait_for_store_data

logger = logging.getLogger(__name__)

# partial matches on shorter keys hit nearly every id
MIN_PARTIAL_LENGTH = 3


class StoreNotFoundError(Exception):
    def __init__(self, requested: str, available: List[Store]):
        super().__init__(f"No store found for {requested!r}")
        self.requested = requested
        self.available = available


class CartError(ValueError):
    pass


@dataclass
class StoreMatch:
    store: Store
    strategy: str


def _contains_either(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b or len(b) < MIN_PARTIAL_LENGTH:
        return False
    return a in b or b in a


def _suffix_match(store_id: str, key: str) -> bool:
    if len(key) < MIN_PARTIAL_LENGTH:
        return False
    return key[-8:] in store_id or store_id[-8:] in key


def resolve_store(
    stores: List[Store],
    requested: Optional[str],
    preview: bool = False,
    preview_store_id: Optional[str] = None,
    preview_owner_id: Optional[str] = None,
    current_user_id: Optional[str] = None,
    allow_fallback: bool = True,
) -> Optional[StoreMatch]:
    key = (requested or "").strip()

    if preview:
        lookups: List[Tuple[str, Callable[[Store], bool]]] = [
            ("exact_id", lambda s: bool(key) and s.id == key),
            ("preview_store_id", lambda s: bool(preview_store_id) and s.id == preview_store_id),
            ("partial_id", lambda s: _suffix_match(s.id, key)),
            ("preview_owner_id", lambda s: bool(preview_owner_id) and s.owner_id == preview_owner_id),
            ("current_user", lambda s: bool(current_user_id) and s.owner_id == current_user_id),
        ]
    else:
        lookups = [
            ("exact_subdomain", lambda s: bool(key) and s.subdomain == key),
            ("exact_id", lambda s: bool(key) and s.id == key),
            ("partial_id", lambda s: _contains_either(s.id, key)),
            ("partial_subdomain", lambda s: _contains_either(s.subdomain, key)),
            ("name", lambda s: len(key) >= MIN_PARTIAL_LENGTH and key.lower() in s.name.lower()),
            ("preview_store_id", lambda s: bool(preview_store_id) and s.id == preview_store_id),
            ("preview_owner_id", lambda s: bool(preview_owner_id) and s.owner_id == preview_owner_id),
        ]

    for strategy, matches in lookups:
        found = next((s for s in stores if matches(s)), None)
        if found:
            logger.info("✅ Found store by %s: %s", strategy, found.name)
            return StoreMatch(found, strategy)
        logger.debug("🔍 No store by %s for %r", strategy, key)

    if len(stores) == 1:
        logger.info("🔧 Only one store available, using it: %s", stores[0].name)
        return StoreMatch(stores[0], "only_store")

    if allow_fallback and stores:
        found = next((s for s in stores if s.status == "active"), stores[0])
        logger.warning("🔧 Fallback: using first available store %s for %r", found.name, key)
        return StoreMatch(found, "fallback")

    logger.error("❌ Store not found! Looking for subdomain/ID: %r among %d stores", key, len(stores))
    return None


def find_storefront_store(
    docs: HybridDocumentStore,
    requested: str,
    preview: bool = False,
    preview_store_id: Optional[str] = None,
    preview_owner_id: Optional[str] = None,
    current_user_id: Optional[str] = None,
) -> StoreMatch:
    stores = get_stores(docs)
    logger.info("📊 Loading storefront for %r (%d stores, preview=%s)", requested, len(stores), preview)

    if not stores and settings.STOREFRONT_WAIT_SECONDS > 0:
        logger.info("⏳ No stores found, waiting for store data...")
        stores = wait_for_store_data(
            lambda: get_stores(docs),
            requested,
            timeout=settings.STOREFRONT_WAIT_SECONDS,
            interval=settings.STOREFRONT_POLL_INTERVAL,
        )

    match = resolve_store(
        stores,
        requested,
        preview=preview,
        preview_store_id=preview_store_id,
        preview_owner_id=preview_owner_id,
        current_user_id=current_user_id,
        allow_fallback=settings.STOREFRONT_FALLBACK_TO_FIRST,
    )
    if match is None:
        raise StoreNotFoundError(requested, stores)
    return match


def _newest_first(product: Product) -> float:
    return product.created_at.timestamp() if product.created_at else 0.0


PRODUCT_SORTS: Dict[str, Tuple[Callable[[Product], float], bool]] = {
    "newest": (_newest_first, True),
    "price_low": (lambda p: p.price, False),
    "price_high": (lambda p: p.price, True),
    "rating": (lambda p: p.rating, True),
    "popularity": (lambda p: p.review_count, True),
}


def filter_products(products: List[Product], filters: Optional[ProductFilter] = None) -> List[Product]:
    """Active products matching the search (name or description), category, price range and rating."""
    filters = filters or ProductFilter()
    query = (filters.search or "").strip().lower()

    visible = [
        p
        for p in products
        if p.status == "active"
        and (not query or query in p.name.lower() or query in p.description.lower())
        and (not filters.category or p.category == filters.category)
        and (filters.min_price is None or p.price >= filters.min_price)
        and (filters.max_price is None or p.price <= filters.max_price)
        and (not filters.min_rating or p.rating >= filters.min_rating)
    ]

    key, descending = PRODUCT_SORTS[filters.sort_by]
    return sorted(visible, key=key, reverse=descending)


def build_storefront(
    match: StoreMatch,
    requested: str,
    products: List[Product],
    categories: List[Category],
    filters: Optional[ProductFilter] = None,
) -> StorefrontView:
    filters = filters or ProductFilter()
    visible = filter_products(products, filters)
    return StorefrontView(
        requested=requested,
        matched_by=match.strategy,
        store=match.store,
        categories=sorted((c for c in categories if c.is_active), key=lambda c: c.sort),
        products=visible,
        featured_products=[p for p in visible if p.featured],
        filters=filters,
    )


def load_storefront(
    docs: HybridDocumentStore,
    requested: str,
    filters: Optional[ProductFilter] = None,
    **lookup,
) -> StorefrontView:
    match = find_storefront_store(docs, requested, **lookup)
    products = product_repository.get_products(docs, match.store.id)
    categories = category_repository.get_categories(docs, match.store.id)
    logger.info(
        "✅ Store data loaded: %s (%d products, %d categories)", match.store.name, len(products), len(categories)
    )
    return build_storefront(match, requested, products, categories, filters)


def merge_cart_lines(lines: List[CartLine]) -> List[CartLine]:
    """Adding an existing product sums quantities; a quantity of zero or less removes the line."""
    merged: Dict[Tuple[str, Optional[str]], int] = {}
    for line in lines:
        key = (line.product_id, line.variant_id)
        merged[key] = merged.get(key, 0) + line.quantity
    return [
        CartLine(product_id=product_id, variant_id=variant_id, quantity=quantity)
        for (product_id, variant_id), quantity in merged.items()
        if quantity > 0
    ]


def _price_line(store: Store, product: Optional[Product], line: CartLine) -> OrderItem:
    if product is None or product.store_id != store.id:
        raise CartError(f"Product {line.product_id} is not available in this store")
    if product.status != "active":
        raise CartError(f"{product.name} is not available for purchase")

    price, stock, variant_name, image = product.price, product.stock, None, (product.images or [""])[0]
    if line.variant_id:
        variant = next((v for v in product.variants if v.id == line.variant_id), None)
        if variant is None:
            raise CartError(f"Unknown variant {line.variant_id} for {product.name}")
        variant_name = variant.name
        if variant.price is not None:
            price = variant.price
        if variant.stock is not None:
            stock = variant.stock
        image = variant.image or image

    if line.quantity > stock:
        raise CartError(f"Insufficient stock for {product.name}: {stock} left")

    return OrderItem(
        product_id=product.id,
        product_name=product.name,
        product_image=image,
        variant_id=line.variant_id,
        variant_name=variant_name,
        price=price,
        quantity=line.quantity,
        total=round(price * line.quantity, 2),
    )


def _check_product_stock(products: Dict[str, Product], items: List[OrderItem]) -> None:
    """Every line draws on its product's stock, so variant lines of one product add up."""
    requested: Dict[str, int] = defaultdict(int)
    for item in items:
        requested[item.product_id] += item.quantity

    for product_id, quantity in requested.items():
        product = products[product_id]
        if quantity > product.stock:
            raise CartError(f"Insufficient stock for {product.name}: {product.stock} left")


def price_cart(store: Store, products: Dict[str, Product], cart: CartRequest) -> CartQuote:
    items = [_price_line(store, products.get(line.product_id), line) for line in merge_cart_lines(cart.items)]
    _check_product_stock(products, items)
    subtotal = round(sum(item.total for item in items), 2)

    taxes = store.settings.taxes
    tax_amount = round(subtotal * taxes.rate / 100, 2) if taxes.enabled and not taxes.include_in_price else 0.0

    shipping = store.settings.shipping
    if not items or not shipping.enabled:
        shipping_cost = 0.0
    elif shipping.free_shipping_threshold > 0 and subtotal >= shipping.free_shipping_threshold:
        shipping_cost = 0.0
    else:
        shipping_cost = shipping.default_cost

    return CartQuote(
        items=items,
        item_count=sum(item.quantity for item in items),
        subtotal=subtotal,
        tax_amount=tax_amount,
        shipping_cost=shipping_cost,
        discount_amount=0.0,
        total=round(subtotal + tax_amount + shipping_cost, 2),
        currency=store.settings.currency,
    )


def quote_cart(docs: HybridDocumentStore, store: Store, cart: CartRequest) -> CartQuote:
    products = {p.id: p for p in product_repository.get_products(docs, store.id)}
    return price_cart(store, products, cart)


def checkout(docs: HybridDocumentStore, store: Store, request: CheckoutRequest) -> Tuple[Order, Customer]:
    products = {p.id: p for p in product_repository.get_products(docs, store.id)}
    quote = price_cart(store, products, request)
    if not quote.items:
        raise CartError("Cart is empty")

    address = request.shipping_address
    customer = customer_repository.get_customer_by_email(docs, store.id, address.email)
    if customer is None:
        name = request.customer_name or f"{address.first_name} {address.last_name}".strip()
        customer = customer_repository.create_customer(
            docs, CustomerCreate(store_id=store.id, name=name, email=address.email, phone=address.phone)
        )

    order = order_repository.create_order(
        docs,
        OrderCreate(
            store_id=store.id,
            customer_id=customer.id,
            items=quote.items,
            subtotal=quote.subtotal,
            tax_amount=quote.tax_amount,
            shipping_cost=quote.shipping_cost,
            discount_amount=quote.discount_amount,
            total=quote.total,
            payment_method=request.payment_method,
            shipping_address=address,
            billing_address=request.billing_address or address,
            notes=request.notes,
        ),
    )

    for item in quote.items:
        product_repository.adjust_stock(docs, products[item.product_id], -item.quantity)
        # refresh so two lines of the same product decrement cumulatively
        products[item.product_id] = product_repository.get_product_by_id(docs, item.product_id)

    customer = customer_repository.record_purchase(docs, customer, order.total) or customer
    return order, customer
