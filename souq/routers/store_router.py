from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from souq.auth.utils import get_current_user, require_roles
from souq.model.store_schema import MerchantStats, Store, StoreCreate, StoreCustomization, StoreUpdate
from souq.repository import store_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.routers.deps import get_managed_store, get_store_or_404
from souq.service.dashboard import get_merchant_stats
from souq.service.storage import StorageNotConfiguredError, build_asset_path, upload_asset
from souq.service.subdomain import validate_subdomain
from souq.service.sync import sync_manager

router = APIRouter(prefix="/store", tags=["Store"])


def check_subdomain(docs: HybridDocumentStore, subdomain: str, store_id: Optional[str] = None):
    if not validate_subdomain(subdomain):
        raise HTTPException(status_code=400, detail=f"Invalid subdomain: {subdomain}")
    existing = store_repository.get_store_by_subdomain(docs, subdomain)
    if existing and existing.id != store_id:
        raise HTTPException(status_code=409, detail=f"Subdomain already taken: {subdomain}")


@router.post("/", response_model=Store)
def create_new_store(
    store_data: StoreCreate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(require_roles("admin")),
):
    check_subdomain(docs, store_data.subdomain)
    store = store_repository.create_store(docs, store_data)
    sync_manager.publish("STORE_CREATED", storeId=store.id, subdomain=store.subdomain, ownerId=store.owner_id)
    return store


@router.get("/", response_model=List[Store])
def list_stores(status: Optional[str] = Query(None), docs: HybridDocumentStore = Depends(get_document_store)):
    return store_repository.get_stores(docs, status=status)


@router.get("/owner/{owner_id}", response_model=Store)
def get_store_by_owner(owner_id: str, docs: HybridDocumentStore = Depends(get_document_store)):
    store = store_repository.get_store_by_owner(docs, owner_id)
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("/subdomain/{subdomain}", response_model=Store)
def get_store_by_subdomain(subdomain: str, docs: HybridDocumentStore = Depends(get_document_store)):
    store = store_repository.get_store_by_subdomain(docs, subdomain)
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("/{store_id}", response_model=Store)
def get_store(store_id: str, docs: HybridDocumentStore = Depends(get_document_store)):
    return get_store_or_404(docs, store_id)


@router.put("/{store_id}", response_model=Store)
def update_store(
    store_id: str,
    data: StoreUpdate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    store = get_managed_store(docs, store_id, user)
    if data.status is not None and data.status != store.status and user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Only admins can change store status")
    if data.subdomain and data.subdomain != store.subdomain:
        check_subdomain(docs, data.subdomain, store_id)

    updated = store_repository.update_store(docs, store_id, data)
    sync_manager.publish("STORE_UPDATED", storeId=store_id, fields=sorted(data.model_fields_set))
    return updated


@router.put("/{store_id}/customization", response_model=Store)
def update_store_customization(
    store_id: str,
    customization: StoreCustomization,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    store = get_managed_store(docs, store_id, user)

    updated = store_repository.update_customization(docs, store_id, customization)
    sync_manager.publish(
        "STORE_CUSTOMIZATION_UPDATED", storeId=store_id, subdomain=store.subdomain, customization=customization.to_document()
    )
    return updated


@router.post("/{store_id}/assets/{kind}", response_model=Store)
def upload_store_asset(
    store_id: str,
    kind: Literal["logo", "cover"],
    file: UploadFile = File(...),
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, store_id, user)

    data = file.file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file")

    path = build_asset_path(f"stores/{store_id}", f"{kind}-{file.filename}")
    try:
        uploaded = upload_asset(path, data, file.content_type or "application/octet-stream")
    except StorageNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not uploaded:
        raise HTTPException(status_code=500, detail="Failed to upload asset")

    updated = store_repository.set_store_fields(docs, store_id, **{kind: uploaded["url"]})
    sync_manager.publish("STORE_UPDATED", storeId=store_id, fields=[kind])
    return updated


@router.get("/{store_id}/stats", response_model=MerchantStats)
def get_store_stats(
    store_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, store_id, user)
    return get_merchant_stats(docs, store_id)
