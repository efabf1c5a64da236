"""
Unit tests for store application review
"""
from unittest.mock import patch

import pytest

from souq.model.application_schema import (
    ApplicationColors,
    ApplicationCustomization,
    MerchantData,
    StoreConfig,
)
from souq.repository import application_repository, store_repository
from souq.service.approval import (
    ApplicationNotFoundError,
    ApplicationStateError,
    approve_application,
    reject_application,
)


@pytest.fixture
def submit(docs):
    """
    Factory that submits a pending application
    """
    def factory(merchant_id: str = "merchant_1", store_name: str = "Noor Boutique", business_name: str = "Noor LLC"):
        return application_repository.submit_application(
            docs,
            merchant_id,
            MerchantData(first_name="Noor", email="noor@example.com", business_name=business_name),
            StoreConfig(
                customization=ApplicationCustomization(
                    store_name=store_name, colors=ApplicationColors(primary="#16a34a")
                )
            ),
        )

    return factory


class TestApproveApplication:
    """Test approval creating the merchant's store"""

    @patch("souq.service.approval.sync_manager")
    def test_approve_creates_store_and_links_it(self, mock_sync, docs, submit):
        application = submit()

        approved, store = approve_application(docs, application.id, "admin_1")

        assert approved.status == "approved"
        assert approved.reviewed_by == "admin_1"
        assert approved.reviewed_at is not None
        assert approved.store_id == store.id

        assert store.owner_id == "merchant_1"
        assert store.name == "Noor Boutique"
        assert store.subdomain == "noor-boutique"
        assert store.status == "active"
        assert store.customization.colors.primary == "#16a34a"
        assert store.customization.homepage.hero_texts[0].title == "Welcome to Noor Boutique"
        assert store_repository.get_store_by_owner(docs, "merchant_1").id == store.id

        published = [c.args[0] for c in mock_sync.publish.call_args_list]
        assert published == ["STORE_CREATED", "STORE_APPLICATION_APPROVED"]

    def test_store_name_falls_back_to_business_name(self, docs, submit):
        application = submit(store_name="", business_name="Desert Rose")

        _, store = approve_application(docs, application.id, "admin_1")

        assert store.name == "Desert Rose"
        assert store.description == "Noor's online store"

    def test_duplicate_subdomain_gets_suffix(self, docs, submit):
        first = submit(merchant_id="m1")
        second = submit(merchant_id="m2")

        _, store_one = approve_application(docs, first.id, "admin_1")
        _, store_two = approve_application(docs, second.id, "admin_1")

        assert store_one.subdomain == "noor-boutique"
        assert store_two.subdomain == "noor-boutique-2"

    def test_already_reviewed_is_rejected(self, docs, submit):
        application = submit()
        approve_application(docs, application.id, "admin_1")

        with pytest.raises(ApplicationStateError):
            approve_application(docs, application.id, "admin_1")

    def test_unknown_application(self, docs):
        with pytest.raises(ApplicationNotFoundError):
            approve_application(docs, "app_missing", "admin_1")


class TestRejectApplication:
    """Test rejection bookkeeping"""

    def test_reject_records_reason(self, docs, submit):
        application = submit()

        rejected = reject_application(docs, application.id, "admin_1", "Incomplete documents")

        assert rejected.status == "rejected"
        assert rejected.rejection_reason == "Incomplete documents"
        assert store_repository.get_stores(docs) == []

    def test_rejected_cannot_be_approved(self, docs, submit):
        application = submit()
        reject_application(docs, application.id, "admin_1", "Incomplete documents")

        with pytest.raises(ApplicationStateError):
            approve_application(docs, application.id, "admin_1")


def test_application_stats(docs, submit):
    pending = submit(merchant_id="m1")
    approved = submit(merchant_id="m2")
    rejected = submit(merchant_id="m3")
    approve_application(docs, approved.id, "admin_1")
    reject_application(docs, rejected.id, "admin_1", "No")

    stats = application_repository.get_application_stats(docs)

    assert (stats.total, stats.pending, stats.approved, stats.rejected) == (3, 1, 1, 1)
    assert application_repository.get_application_by_merchant(docs, "m1").id == pending.id
