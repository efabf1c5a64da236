import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from souq.auth.utils import get_optional_user
from souq.model.order_schema import CartQuote, CartRequest, CheckoutRequest, Order
from souq.model.store_schema import Store
from souq.model.storefront_schema import ProductFilter, ProductSort, StoreDirectoryEntry, StorefrontView
from souq.repository import store_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.service.storefront import CartError, StoreNotFoundError, checkout, load_storefront, quote_cart
from souq.service.sync import sync_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storefront", tags=["Storefront"])


def get_exact_store(docs: HybridDocumentStore, key: str) -> Store:
    """Cart and checkout only accept the store's own subdomain or id."""
    store = store_repository.get_store_by_subdomain(docs, key) or store_repository.get_store_by_id(docs, key)
    if not store or store.status != "active":
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("/{key}", response_model=StorefrontView)
def view_storefront(
    key: str,
    preview: bool = False,
    preview_store_id: Optional[str] = None,
    preview_owner_id: Optional[str] = None,
    search: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    sort_by: ProductSort = "newest",
    docs: HybridDocumentStore = Depends(get_document_store),
    user: Optional[dict] = Depends(get_optional_user),
):
    try:
        view = load_storefront(
            docs,
            key,
            filters=ProductFilter(
                search=search,
                category=category,
                min_price=min_price,
                max_price=max_price,
                min_rating=min_rating,
                sort_by=sort_by,
            ),
            preview=preview,
            preview_store_id=preview_store_id,
            preview_owner_id=preview_owner_id,
            current_user_id=(user or {}).get("id"),
        )
    except StoreNotFoundError as e:
        raise HTTPException(
            status_code=404,
            detail={
                "message": str(e),
                "requested": e.requested,
                "availableStores": [
                    StoreDirectoryEntry.model_validate(s, from_attributes=True).model_dump(by_alias=True)
                    for s in e.available
                ],
            },
        )

    if preview:
        sync_manager.publish(
            "STORE_DATA_FOR_PREVIEW", storeId=view.store.id, subdomain=view.store.subdomain, matchedBy=view.matched_by
        )
    return view


@router.post("/{key}/cart", response_model=CartQuote)
def price_storefront_cart(key: str, cart: CartRequest, docs: HybridDocumentStore = Depends(get_document_store)):
    store = get_exact_store(docs, key)
    try:
        return quote_cart(docs, store, cart)
    except CartError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{key}/checkout", response_model=Order)
def checkout_storefront(key: str, request: CheckoutRequest, docs: HybridDocumentStore = Depends(get_document_store)):
    store = get_exact_store(docs, key)
    try:
        order, customer = checkout(docs, store, request)
    except CartError as e:
        logger.info("❌ Checkout rejected for %s: %s", store.subdomain, e)
        raise HTTPException(status_code=400, detail=str(e))

    sync_manager.publish("ORDER_CREATED", orderId=order.id, orderNumber=order.order_number, storeId=store.id)
    sync_manager.publish("CUSTOMER_UPDATED", customerId=customer.id, storeId=store.id)
    for item in order.items:
        sync_manager.publish("PRODUCT_UPDATED", productId=item.product_id, storeId=store.id)
    return order
