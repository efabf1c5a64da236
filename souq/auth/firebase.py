import logging
from typing import Optional

from firebase_admin import auth as firebase_auth

from souq.core.config import settings
from souq.db.firestore import get_firebase_app

logger = logging.getLogger(__name__)


def verify_firebase_token(token: str) -> Optional[dict]:
    """Verify a Firebase ID token and map it to the request user shape."""
    if not settings.FIREBASE_AUTH_ENABLED:
        return None
    app = get_firebase_app()
    if app is None:
        return None
    try:
        claims = firebase_auth.verify_id_token(token, app=app)
    except (ValueError, firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError) as e:
        logger.warning("⚠️ Firebase token rejected: %s", e)
        return None

    return {
        "id": claims.get("uid") or claims.get("sub"),
        "email": claims.get("email"),
        "role": claims.get("userType", "customer"),
        "provider": "firebase",
    }
