import logging
from typing import List, Optional

from souq.model.application_schema import (
    ApplicationStats,
    MerchantData,
    StoreApplication,
    StoreConfig,
)
from souq.repository.document_store import STORE_APPLICATIONS, HybridDocumentStore, utcnow

logger = logging.getLogger(__name__)


def submit_application(
    docs: HybridDocumentStore, merchant_id: str, merchant_data: MerchantData, store_config: StoreConfig
) -> StoreApplication:
    logger.info("📝 Submitting store application for: %s", merchant_data.first_name)
    payload = {
        "merchantId": merchant_id,
        "merchantData": merchant_data.to_document(),
        "storeConfig": store_config.to_document(),
        "status": "pending",
        "submittedAt": utcnow(),
    }
    application = StoreApplication.model_validate(docs.create(STORE_APPLICATIONS, payload))
    logger.info("✅ Store application submitted: %s", application.id)
    return application


def get_applications(docs: HybridDocumentStore, status: Optional[str] = None) -> List[StoreApplication]:
    filters = {"status": status} if status else None
    rows = docs.query(STORE_APPLICATIONS, filters=filters, order_by="submittedAt", descending=True)
    return [StoreApplication.model_validate(d) for d in rows]


def get_application_by_id(docs: HybridDocumentStore, application_id: str) -> Optional[StoreApplication]:
    doc = docs.get(STORE_APPLICATIONS, application_id)
    return StoreApplication.model_validate(doc) if doc else None


def get_application_by_merchant(docs: HybridDocumentStore, merchant_id: str) -> Optional[StoreApplication]:
    rows = docs.query(
        STORE_APPLICATIONS, filters={"merchantId": merchant_id}, order_by="submittedAt", descending=True
    )
    return StoreApplication.model_validate(rows[0]) if rows else None


def mark_approved(
    docs: HybridDocumentStore, application_id: str, reviewer_id: str, store_id: Optional[str] = None
) -> Optional[StoreApplication]:
    doc = docs.update(
        STORE_APPLICATIONS,
        application_id,
        {"status": "approved", "reviewedAt": utcnow(), "reviewedBy": reviewer_id, "storeId": store_id},
    )
    return StoreApplication.model_validate(doc) if doc else None


def mark_rejected(
    docs: HybridDocumentStore, application_id: str, reviewer_id: str, reason: str
) -> Optional[StoreApplication]:
    doc = docs.update(
        STORE_APPLICATIONS,
        application_id,
        {"status": "rejected", "reviewedAt": utcnow(), "reviewedBy": reviewer_id, "rejectionReason": reason},
    )
    if doc:
        logger.info("❌ Store application rejected: %s", application_id)
    return StoreApplication.model_validate(doc) if doc else None


def get_application_stats(docs: HybridDocumentStore) -> ApplicationStats:
    applications = get_applications(docs)
    return ApplicationStats(
        total=len(applications),
        pending=sum(1 for a in applications if a.status == "pending"),
        approved=sum(1 for a in applications if a.status == "approved"),
        rejected=sum(1 for a in applications if a.status == "rejected"),
    )
