"""
Request identity.

Sessions live with the auth provider; the API only verifies the Firebase ID
token the authoring UI sends as `Authorization: Bearer <token>` and uses the
uid as the work author and rate-limit key.
"""

import logging
from typing import Optional

import firebase_admin
from fastapi import Header
from firebase_admin import auth as firebase_auth

from artfolio.core.errors import ServiceUnavailableError, UnauthorizedError
from artfolio.integrations import firebase as firebase_module

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Malformed Authorization header")
    return token.strip()


async def get_current_user(authorization: Optional[str] = Header(None)) -> str:
    """FastAPI dependency returning the caller's uid."""
    token = _bearer_token(authorization)
    if not firebase_admin._apps:
        logger.error("[AUTH] Firebase app not initialized; cannot verify ID tokens")
        raise ServiceUnavailableError("Authentication service unavailable.")
    try:
        claims = firebase_module.verify_id_token(token)
    except (firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError,
            firebase_auth.RevokedIdTokenError, ValueError) as e:
        logger.info(f"[AUTH] Rejected ID token: {type(e).__name__}")
        raise UnauthorizedError("Invalid or expired session")
    return claims["uid"]
