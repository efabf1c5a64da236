"""
Unit tests for tokens, role checks and development fallback sign-in
"""
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from souq.auth.fallback import fallback_sign_in, is_fallback_mode
from souq.auth.utils import (
    create_access_token,
    ensure_store_access,
    hash_password,
    resolve_token,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:
    """Test JWT round trips"""

    def test_resolve_token_returns_user_dict(self):
        token = create_access_token({"sub": "u1", "role": "merchant", "email": "m@example.com"})

        user = resolve_token(token)

        assert user == {"id": "u1", "email": "m@example.com", "role": "merchant", "provider": "local"}

    def test_garbage_token_is_rejected(self):
        assert resolve_token("not-a-jwt") is None

    def test_token_without_subject_is_rejected(self):
        assert resolve_token(create_access_token({"role": "admin"})) is None


class TestEnsureStoreAccess:
    """Admins manage all stores, merchants only their own"""

    def test_admin_allowed(self):
        ensure_store_access({"id": "a1", "role": "admin"}, "m1")

    def test_owner_allowed(self):
        ensure_store_access({"id": "m1", "role": "merchant"}, "m1")

    @pytest.mark.parametrize(
        "user", [{"id": "m2", "role": "merchant"}, {"id": "m1", "role": "customer"}]
    )
    def test_others_forbidden(self, user):
        with pytest.raises(HTTPException) as exc:
            ensure_store_access(user, "m1")
        assert exc.value.status_code == 403


class TestFallbackSignIn:
    """Test development credential matching"""

    def test_exact_match(self):
        user = fallback_sign_in("merchant@test.com", "merchant123")

        assert user["uid"] == "merchant_fallback"
        assert user["role"] == "merchant"
        assert "password" not in user

    def test_trimmed_match(self):
        assert fallback_sign_in("  admin@ecommerce-platform.com ", " AdminPlatform2024! ")["role"] == "admin"

    def test_case_insensitive_email(self):
        assert fallback_sign_in("Customer@Test.com", "customer123")["role"] == "customer"

    def test_password_is_case_sensitive(self):
        assert fallback_sign_in("merchant@test.com", "MERCHANT123") is None

    def test_unknown_user(self):
        assert fallback_sign_in("nobody@test.com", "merchant123") is None

    def test_disabled_outside_development(self):
        with patch("souq.auth.fallback.settings") as mock_settings:
            mock_settings.FALLBACK_AUTH_ENABLED = True
            mock_settings.is_development = False
            mock_settings.FIREBASE_AUTH_ENABLED = False

            assert is_fallback_mode() is False
            assert fallback_sign_in("merchant@test.com", "merchant123") is None

    def test_disabled_when_firebase_auth_enabled(self):
        with patch("souq.auth.fallback.settings") as mock_settings:
            mock_settings.FALLBACK_AUTH_ENABLED = True
            mock_settings.is_development = True
            mock_settings.FIREBASE_AUTH_ENABLED = True

            assert is_fallback_mode() is False
