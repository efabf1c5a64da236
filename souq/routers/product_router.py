from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from souq.auth.utils import get_current_user
from souq.model.product_schema import Product, ProductCreate, ProductUpdate
from souq.repository import product_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.routers.deps import get_managed_store
from souq.service.storage import StorageNotConfiguredError, build_asset_path, upload_asset
from souq.service.sync import sync_manager

router = APIRouter(prefix="/product", tags=["Product"])


def get_managed_product(docs: HybridDocumentStore, product_id: str, user: dict) -> Product:
    product = product_repository.get_product_by_id(docs, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    get_managed_store(docs, product.store_id, user)
    return product


@router.post("/", response_model=Product)
def create_product(
    payload: ProductCreate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    get_managed_store(docs, payload.store_id, user)
    product = product_repository.create_product(docs, payload)
    sync_manager.publish("PRODUCT_CREATED", productId=product.id, storeId=product.store_id)
    return product


@router.get("/", response_model=List[Product])
def list_products(
    store_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    docs: HybridDocumentStore = Depends(get_document_store),
):
    return product_repository.get_products(docs, store_id=store_id, status=status)


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, docs: HybridDocumentStore = Depends(get_document_store)):
    product = product_repository.get_product_by_id(docs, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    data: ProductUpdate,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    product = get_managed_product(docs, product_id, user)
    updated = product_repository.update_product(docs, product_id, data)
    sync_manager.publish("PRODUCT_UPDATED", productId=product_id, storeId=product.store_id)
    return updated


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    product = get_managed_product(docs, product_id, user)
    if not product_repository.delete_product(docs, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    sync_manager.publish("PRODUCT_DELETED", productId=product_id, storeId=product.store_id)
    return {"message": "Product deleted"}


@router.post("/{product_id}/images", response_model=Product)
def upload_product_images(
    product_id: str,
    files: List[UploadFile] = File(...),
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    product = get_managed_product(docs, product_id, user)

    urls = []
    for file in files:
        data = file.file.read()
        if not data:
            continue
        path = build_asset_path(f"products/{product.store_id}/{product_id}", file.filename)
        try:
            uploaded = upload_asset(path, data, file.content_type or "application/octet-stream")
        except StorageNotConfiguredError as e:
            raise HTTPException(status_code=503, detail=str(e))
        if not uploaded:
            raise HTTPException(status_code=500, detail=f"Failed to upload {file.filename}")
        urls.append(uploaded["url"])

    if not urls:
        raise HTTPException(status_code=400, detail="No image data received")

    updated = product_repository.add_product_images(docs, product, urls)
    sync_manager.publish("PRODUCT_UPDATED", productId=product_id, storeId=product.store_id)
    return updated
