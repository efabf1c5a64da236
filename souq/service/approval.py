import logging
import time
from typing import Optional, Tuple

from souq.model.application_schema import StoreApplication
from souq.model.store_schema import (
    HeroText,
    Store,
    StoreColors,
    StoreCreate,
    StoreCustomization,
    StoreHomepage,
    StoreSettings,
)
from souq.repository import application_repository, store_repository
from souq.repository.document_store import HybridDocumentStore
from souq.service.subdomain import ensure_unique_subdomain, generate_valid_subdomain
from souq.service.sync import sync_manager

logger = logging.getLogger(__name__)


class ApplicationNotFoundError(LookupError):
    pass


class ApplicationStateError(ValueError):
    pass


def default_customization(store_name: str, colors: Optional[dict] = None) -> StoreCustomization:
    return StoreCustomization(
        colors=StoreColors(**(colors or {})),
        homepage=StoreHomepage(
            hero_texts=[
                HeroText(
                    title=f"Welcome to {store_name}",
                    subtitle="The best products at great prices",
                    button_text="Shop now",
                )
            ]
        ),
    )


def build_store_from_application(application: StoreApplication, subdomain: str) -> StoreCreate:
    config = application.store_config.customization
    merchant = application.merchant_data
    name = config.store_name or merchant.business_name
    return StoreCreate(
        name=name,
        description=config.store_description or f"{merchant.first_name}'s online store",
        subdomain=subdomain,
        owner_id=application.merchant_id,
        template=application.store_config.template,
        customization=default_customization(name, config.colors.model_dump()),
        settings=StoreSettings(),
        status="active",
    )


def _load_pending(docs: HybridDocumentStore, application_id: str) -> StoreApplication:
    application = application_repository.get_application_by_id(docs, application_id)
    if application is None:
        logger.error("❌ Application not found for review: %s", application_id)
        raise ApplicationNotFoundError(application_id)
    if application.status != "pending":
        raise ApplicationStateError(f"Application {application_id} is already {application.status}")
    return application


def approve_application(
    docs: HybridDocumentStore, application_id: str, reviewer_id: str
) -> Tuple[StoreApplication, Store]:
    application = _load_pending(docs, application_id)
    logger.info("🔥 Approving application: %s", application_id)

    store_name = application.store_config.customization.store_name or application.merchant_data.business_name
    subdomain = generate_valid_subdomain(store_name, f"store-{int(time.time() * 1000)}")
    subdomain = ensure_unique_subdomain(subdomain, (s.subdomain for s in store_repository.get_stores(docs)))

    store = store_repository.create_store(docs, build_store_from_application(application, subdomain))
    approved = application_repository.mark_approved(docs, application_id, reviewer_id, store_id=store.id)
    logger.info("✅ Store created for approved application: %s -> %s", application_id, store.id)

    sync_manager.publish("STORE_CREATED", storeId=store.id, subdomain=store.subdomain, ownerId=store.owner_id)
    sync_manager.publish("STORE_APPLICATION_APPROVED", applicationId=application_id, storeId=store.id)
    return approved, store


def reject_application(
    docs: HybridDocumentStore, application_id: str, reviewer_id: str, reason: str
) -> StoreApplication:
    _load_pending(docs, application_id)
    rejected = application_repository.mark_rejected(docs, application_id, reviewer_id, reason)
    sync_manager.publish("STORE_APPLICATION_REJECTED", applicationId=application_id, reason=reason)
    return rejected
