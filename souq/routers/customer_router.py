from typing import List

from fastapi import APIRouter, Depends, HTTPException

from souq.auth.utils import get_current_user
from souq.model.customer_schema import Customer, CustomerCreate, CustomerUpdate
from souq.repository import customer_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.routers.deps import get_managed_store
from souq.service.sync import sync_manager

router = APIRouter(prefix="/customer", tags=["Customer"])


@router.get("/", response_model=List[Customer])
def list_customers(
    store_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, store_id, user)
    return customer_repository.get_customers(docs, store_id)


@router.post("/", response_model=Customer)
def create_customer(
    payload: CustomerCreate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, payload.store_id, user)
    if customer_repository.get_customer_by_email(docs, payload.store_id, payload.email):
        raise HTTPException(status_code=409, detail="Customer with this email already exists")
    customer = customer_repository.create_customer(docs, payload)
    sync_manager.publish("CUSTOMER_UPDATED", customerId=customer.id, storeId=customer.store_id)
    return customer


@router.put("/{customer_id}", response_model=Customer)
def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    customer = customer_repository.get_customer_by_id(docs, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    get_managed_store(docs, customer.store_id, user)

    updated = customer_repository.update_customer(docs, customer_id, data)
    sync_manager.publish("CUSTOMER_UPDATED", customerId=customer_id, storeId=customer.store_id)
    return updated
