"""Development sign-in used when Firebase Auth is disabled.

Only active when FALLBACK_AUTH_ENABLED is set and APP_ENV is development.
"""

import logging
from typing import Optional

from souq.core.config import settings

logger = logging.getLogger(__name__)

FALLBACK_USERS = [
    {
        "uid": "admin_fallback",
        "email": "admin@ecommerce-platform.com",
        "password": "AdminPlatform2024!",
        "role": "admin",
        "display_name": "Platform Admin",
    },
    {
        "uid": "merchant_fallback",
        "email": "merchant@test.com",
        "password": "merchant123",
        "role": "merchant",
        "display_name": "Test Merchant",
    },
    {
        "uid": "customer_fallback",
        "email": "customer@test.com",
        "password": "customer123",
        "role": "customer",
        "display_name": "Test Customer",
    },
]


def is_fallback_mode() -> bool:
    return settings.FALLBACK_AUTH_ENABLED and settings.is_development and not settings.FIREBASE_AUTH_ENABLED


def fallback_sign_in(email: str, password: str) -> Optional[dict]:
    """Match against the development users: exact, then trimmed, then case-insensitive email."""
    if not is_fallback_mode():
        return None

    user = next((u for u in FALLBACK_USERS if u["email"] == email and u["password"] == password), None)

    if user is None:
        logger.debug("Exact fallback match failed, trying trimmed match...")
        clean_email, clean_password = email.strip(), password.strip()
        user = next(
            (u for u in FALLBACK_USERS if u["email"] == clean_email and u["password"] == clean_password), None
        )

    if user is None:
        logger.debug("Trimmed fallback match failed, trying case-insensitive match...")
        lower_email = email.strip().lower()
        user = next(
            (u for u in FALLBACK_USERS if u["email"].lower() == lower_email and u["password"] == password.strip()),
            None,
        )

    if user is None:
        logger.info("❌ Fallback sign in failed for %s", email.strip())
        return None

    logger.info("✅ Fallback sign in successful: %s (%s)", user["email"], user["role"])
    return {k: v for k, v in user.items() if k != "password"}


def show_available_credentials():
    if not is_fallback_mode():
        return
    logger.info("🔐 Available fallback credentials:")
    for user in FALLBACK_USERS:
        logger.info("📧 %s | 🔑 %s | 👤 %s", user["email"], user["password"], user["role"])
