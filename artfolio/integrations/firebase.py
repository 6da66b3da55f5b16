"""
Firebase integration: Firestore holds published works, Firebase Auth issues
the ID tokens the authoring UI sends with every write.

`db` starts as None. Call `initialize()` inside the FastAPI lifespan; route
and service code reads `firebase.db` at call time so tests can swap it.
"""

import json
import logging

import firebase_admin
from firebase_admin import auth, credentials, firestore

from artfolio.config import settings

logger = logging.getLogger(__name__)

db = None  # firestore.Client | None


def initialize() -> None:
    global db

    if not firebase_admin._apps:
        cred = None
        if settings.firebase_service_account:
            try:
                cred = credentials.Certificate(json.loads(settings.firebase_service_account))
            except (ValueError, OSError) as e:
                logger.error(f"[STARTUP] Invalid FIREBASE_SERVICE_ACCOUNT, using default credentials: {e}")
        firebase_admin.initialize_app(cred)

    db = firestore.client()
    logger.info("[STARTUP] Firebase initialized")


def verify_id_token(token: str) -> dict:
    """Returns the decoded claims; raises firebase_admin.auth errors on bad tokens."""
    return auth.verify_id_token(token)
