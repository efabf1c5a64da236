from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from souq.auth.utils import get_current_user, require_roles
from souq.model.application_schema import (
    ApplicationRejection,
    ApprovalResult,
    ApplicationStats,
    ApplicationSubmit,
    StoreApplication,
)
from souq.repository import application_repository
from souq.repository.document_store import HybridDocumentStore, get_document_store
from souq.service.approval import (
    ApplicationNotFoundError,
    ApplicationStateError,
    approve_application,
    reject_application,
)
from souq.service.sync import sync_manager

router = APIRouter(prefix="/application", tags=["Application"])


def check_applicant(user: dict, merchant_id: str):
    if user.get("role") == "admin" or user.get("id") == merchant_id:
        return
    raise HTTPException(status_code=403, detail="Not your application")


@router.post("/", response_model=StoreApplication)
def submit_application(
    payload: ApplicationSubmit,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    if user.get("role") == "admin":
        merchant_id = payload.merchant_id
        if not merchant_id:
            raise HTTPException(status_code=400, detail="merchantId is required")
    else:
        if payload.merchant_id and payload.merchant_id != user["id"]:
            raise HTTPException(status_code=403, detail="Cannot apply on behalf of another merchant")
        merchant_id = user["id"]

    existing = application_repository.get_application_by_merchant(docs, merchant_id)
    if existing and existing.status == "pending":
        raise HTTPException(status_code=409, detail="A pending application already exists for this merchant")

    application = application_repository.submit_application(
        docs, merchant_id, payload.merchant_data, payload.store_config
    )
    sync_manager.publish("STORE_APPLICATION_SUBMITTED", applicationId=application.id, merchantId=merchant_id)
    return application


@router.get("/", response_model=List[StoreApplication])
def list_applications(
    status: Optional[str] = None,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(require_roles("admin")),
):
    return application_repository.get_applications(docs, status=status)


@router.get("/stats", response_model=ApplicationStats)
def application_stats(
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(require_roles("admin")),
):
    return application_repository.get_application_stats(docs)


@router.get("/merchant/{merchant_id}", response_model=StoreApplication)
def get_application_by_merchant(
    merchant_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    check_applicant(user, merchant_id)
    application = application_repository.get_application_by_merchant(docs, merchant_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.get("/{application_id}", response_model=StoreApplication)
def get_application(
    application_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(get_current_user),
):
    application = application_repository.get_application_by_id(docs, application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    check_applicant(user, application.merchant_id)
    return application


@router.post("/{application_id}/approve", response_model=ApprovalResult)
def approve(
    application_id: str,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(require_roles("admin")),
):
    try:
        application, store = approve_application(docs, application_id, user["id"])
    except ApplicationNotFoundError:
        raise HTTPException(status_code=404, detail="Application not found")
    except ApplicationStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ApprovalResult(application=application, store=store)


@router.post("/{application_id}/reject", response_model=StoreApplication)
def reject(
    application_id: str,
    payload: ApplicationRejection,
    docs: HybridDocumentStore = Depends(get_document_store),
    user: dict = Depends(require_roles("admin")),
):
    try:
        return reject_application(docs, application_id, user["id"], payload.reason)
    except ApplicationNotFoundError:
        raise HTTPException(status_code=404, detail="Application not found")
    except ApplicationStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
