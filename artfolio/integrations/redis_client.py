"""
Upstash Redis integration, used for per-user detection rate limits.

`client` stays None when credentials are missing; the rate limiter then
falls back to process memory.
"""

import logging

from upstash_redis import Redis

from artfolio.config import settings

logger = logging.getLogger(__name__)

client = None  # Redis | None


def initialize() -> None:
    global client

    if not (settings.upstash_redis_rest_url and settings.upstash_redis_rest_token):
        logger.warning("[STARTUP] Redis credentials not found. Rate limiting will fallback to memory.")
        return

    try:
        client = Redis(url=settings.upstash_redis_rest_url, token=settings.upstash_redis_rest_token)
        logger.info("[STARTUP] Upstash Redis client initialized")
    except Exception as e:
        logger.error(f"[STARTUP] Failed to initialize Upstash Redis client: {e}")
