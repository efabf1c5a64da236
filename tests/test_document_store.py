"""
Unit tests for HybridDocumentStore primary/fallback behaviour

The primary backend is a Mock so each test controls whether the
"Firestore" side answers or raises.
"""
from unittest.mock import Mock

import pytest

from souq.domain.ports.document_backend import DocumentBackendPort
from souq.infra.sql_backend import SqlDocumentBackend
from souq.repository.document_store import HybridDocumentStore


@pytest.fixture
def primary():
    backend = Mock(spec=DocumentBackendPort)
    backend.name = "firestore"
    return backend


@pytest.fixture
def hybrid(db, primary):
    return HybridDocumentStore(local=SqlDocumentBackend(db), primary=primary)


class TestLocalOnly:
    """Without a primary every call is served locally"""

    def test_create_and_query(self, docs):
        docs.create("stores", {"name": "Alpha"})

        assert [d["name"] for d in docs.query("stores")] == ["Alpha"]
        assert docs.last_source == "local"
        assert docs.primary_enabled is False


class TestPrimarySuccess:
    """Primary answers and results are mirrored locally"""

    def test_create_mirrors_into_local(self, hybrid, primary):
        primary.add.return_value = {"id": "fs_1", "name": "Alpha"}

        created = hybrid.create("stores", {"name": "Alpha"})

        assert created["id"] == "fs_1"
        assert hybrid.last_source == "firestore"
        assert hybrid.local.get("stores", "fs_1") == {"id": "fs_1", "name": "Alpha"}

    def test_query_refreshes_local_cache(self, hybrid, primary):
        primary.query.return_value = [{"id": "fs_1", "name": "Alpha"}, {"id": "fs_2", "name": "Beta"}]

        hybrid.query("stores")

        assert len(hybrid.local.query("stores")) == 2

    def test_get_miss_does_not_fall_back(self, hybrid, primary):
        hybrid.local.set("stores", "only_local", {"name": "Stale"})
        primary.get.return_value = None

        assert hybrid.get("stores", "only_local") is None
        assert hybrid.last_source == "firestore"


class TestPrimaryFailure:
    """Any primary exception is served from the local store"""

    def test_create_falls_back(self, hybrid, primary):
        primary.add.side_effect = RuntimeError("permission denied")

        created = hybrid.create("products", {"name": "Widget"})

        assert created["id"].startswith("product_")
        assert hybrid.last_source == "local"

    def test_query_falls_back_with_filters(self, hybrid, primary):
        hybrid.local.add("products", {"storeId": "s1", "name": "A"})
        hybrid.local.add("products", {"storeId": "s2", "name": "B"})
        primary.query.side_effect = ConnectionError("offline")

        rows = hybrid.query("products", filters={"storeId": "s1"})

        assert [r["name"] for r in rows] == ["A"]

    def test_get_falls_back(self, hybrid, primary):
        hybrid.local.set("stores", "s1", {"name": "Alpha"})
        primary.get.side_effect = TimeoutError()

        assert hybrid.get("stores", "s1")["name"] == "Alpha"

    def test_delete_falls_back(self, hybrid, primary):
        hybrid.local.set("stores", "s1", {"name": "Alpha"})
        primary.delete.side_effect = RuntimeError("offline")

        assert hybrid.delete("stores", "s1") is True
        assert hybrid.local.get("stores", "s1") is None


class TestUpdate:
    """Test update payload handling"""

    def test_update_strips_protected_fields_and_stamps_updated_at(self, docs):
        created = docs.create("stores", {"name": "Alpha", "createdAt": "2024-01-01T00:00:00+00:00"})

        updated = docs.update(
            "stores", created["id"], {"id": "hijack", "createdAt": "2030-01-01T00:00:00+00:00", "name": "Beta"}
        )

        assert updated["id"] == created["id"]
        assert updated["createdAt"] == "2024-01-01T00:00:00+00:00"
        assert updated["name"] == "Beta"
        assert "updatedAt" in updated

    def test_update_unknown_returns_none(self, docs):
        assert docs.update("stores", "missing", {"name": "x"}) is None

    def test_primary_update_payload(self, hybrid, primary):
        primary.update.return_value = {"id": "fs_1", "name": "Beta"}

        hybrid.update("stores", "fs_1", {"id": "fs_1", "name": "Beta"})

        _, _, payload = primary.update.call_args.args
        assert "id" not in payload
        assert payload["name"] == "Beta"
        assert "updatedAt" in payload
