from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from souq.auth.utils import get_current_user
from souq.model.order_schema import Order, OrderStatusUpdate
from souq.repository import order_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.routers.deps import get_managed_store
from souq.service.sync import sync_manager

router = APIRouter(prefix="/order", tags=["Order"])


def get_managed_order(docs: HybridDocumentStore, order_id: str, user: dict) -> Order:
    order = order_repository.get_order_by_id(docs, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    get_managed_store(docs, order.store_id, user)
    return order


@router.get("/", response_model=List[Order])
def list_orders(
    store_id: str,
    status: Optional[str] = None,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, store_id, user)
    return order_repository.get_orders(docs, store_id=store_id, status=status)


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    return get_managed_order(docs, order_id, user)


@router.put("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    order = get_managed_order(docs, order_id, user)
    updated = order_repository.update_order_status(docs, order_id, data)
    sync_manager.publish("ORDER_STATUS_UPDATED", orderId=order_id, storeId=order.store_id, status=data.status)
    return updated
