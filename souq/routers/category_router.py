from typing import List

from fastapi import APIRouter, Depends, HTTPException

from souq.auth.utils import get_current_user
from souq.model.category_schema import Category, CategoryCreate, CategoryUpdate
from souq.repository import category_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.routers.deps import get_managed_store
from souq.service.sync import sync_manager

router = APIRouter(prefix="/category", tags=["Category"])


def get_managed_category(docs: HybridDocumentStore, category_id: str, user: dict) -> Category:
    category = category_repository.get_category_by_id(docs, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    get_managed_store(docs, category.store_id, user)
    return category


@router.post("/", response_model=Category)
def create_category(
    payload: CategoryCreate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, payload.store_id, user)
    category = category_repository.create_category(docs, payload)
    sync_manager.publish("CATEGORY_CREATED", categoryId=category.id, storeId=category.store_id)
    return category


@router.get("/", response_model=List[Category])
def list_categories(
    store_id: str, active_only: bool = False, docs: HybridDocumentStore = Depends(get_document_store)
):
    return category_repository.get_categories(docs, store_id=store_id, active_only=active_only)


@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    data: CategoryUpdate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    category = get_managed_category(docs, category_id, user)
    updated = category_repository.update_category(docs, category_id, data)
    sync_manager.publish("CATEGORY_UPDATED", categoryId=category_id, storeId=category.store_id)
    return updated


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    category = get_managed_category(docs, category_id, user)
    category_repository.delete_category(docs, category_id)
    sync_manager.publish("CATEGORY_DELETED", categoryId=category_id, storeId=category.store_id)
    return {"message": "Category deleted"}
