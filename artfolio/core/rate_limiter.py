"""
Per-user limit on detection calls: Redis-backed (preferred) with an
in-memory fallback. Every check is a paid vendor request.

The Redis client is accessed at call-time via the integration module
so it picks up the instance initialized during the FastAPI lifespan.
"""

import time
import logging
from typing import Dict

from artfolio.config import settings
from artfolio.core.errors import AppError
from artfolio.integrations import redis_client as redis_module

logger = logging.getLogger(__name__)

# {identifier: [timestamp, ...]}
_rate_limits: Dict[str, list] = {}

RATE_LIMIT_WINDOW = settings.rate_limit_request_window_sec
MAX_REQUESTS_PER_WINDOW = settings.rate_limit_max_requests


class RateLimitedError(AppError):
    status_code = 429
    code = "RATE_LIMITED"

    def __init__(self):
        super().__init__(
            "Too many verification requests. Please try again in a minute.",
            details={"retryable": True, "window_sec": RATE_LIMIT_WINDOW},
        )


def check_rate_limit(identifier: str) -> None:
    rc = redis_module.client
    if rc:
        _check_rate_limit_redis(rc, identifier)
    else:
        _check_rate_limit_memory(identifier)


def _check_rate_limit_redis(rc, identifier: str) -> None:
    key = f"detect_rate:{identifier}"
    try:
        current_count = rc.incr(key)
        if current_count == 1:
            rc.expire(key, RATE_LIMIT_WINDOW)
    except Exception as e:
        logger.error(f"Redis rate limit error: {e}. Falling back to memory.")
        _check_rate_limit_memory(identifier)
        return

    if current_count > MAX_REQUESTS_PER_WINDOW:
        logger.warning(f"[RATE] Redis limit exceeded for {identifier}")
        raise RateLimitedError()


def _check_rate_limit_memory(identifier: str) -> None:
    """Sliding-window counter kept in this process."""
    now = time.time()

    if len(_rate_limits) > settings.rate_limit_memory_limit:
        _cleanup_all_limits(now)

    recent = [t for t in _rate_limits.get(identifier, []) if now - t < RATE_LIMIT_WINDOW]

    if len(recent) >= MAX_REQUESTS_PER_WINDOW:
        _rate_limits[identifier] = recent
        logger.warning(f"[RATE] Memory limit exceeded for {identifier}")
        raise RateLimitedError()

    recent.append(now)
    _rate_limits[identifier] = recent


def _cleanup_all_limits(now: float) -> None:
    expired_keys = [
        k for k, v in _rate_limits.items()
        if not v or now - v[-1] > RATE_LIMIT_WINDOW
    ]
    for k in expired_keys:
        del _rate_limits[k]
    logger.info(f"[RATE] Cleanup removed {len(expired_keys)} idle users.")
