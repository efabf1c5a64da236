"""Firebase Admin initialization shared by Firestore and auth."""

import logging

import firebase_admin
from firebase_admin import credentials, firestore

from souq.core.config import settings

logger = logging.getLogger(__name__)

_firebase_app = None


def get_firebase_app():
    """Get or initialize the Firebase Admin app, or None when disabled."""
    global _firebase_app

    if not (settings.FIREBASE_ENABLED or settings.FIREBASE_AUTH_ENABLED):
        return None

    if _firebase_app is not None:
        return _firebase_app

    try:
        _firebase_app = firebase_admin.get_app()
        return _firebase_app
    except ValueError:
        pass

    try:
        if settings.FIREBASE_CREDENTIALS_PATH:
            cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
        else:
            cred = credentials.ApplicationDefault()

        options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
        _firebase_app = firebase_admin.initialize_app(cred, options)
        logger.info("🔥 Firebase Admin SDK initialized")
        return _firebase_app
    except Exception as e:
        logger.exception("❌ Failed to initialize Firebase: %s", e)
        return None


def get_firestore_client():
    if not settings.FIREBASE_ENABLED:
        return None
    app = get_firebase_app()
    if app is None:
        return None
    return firestore.client(app)
