"""
Outbound call helper shared by the vendor adapters.

One POST, no retries. Network failures, timeouts and HTTP error statuses
become TransportError; a 2xx body that is not JSON comes back as None so the
adapter can apply its malformed-response policy.
"""

import asyncio
import json
import logging
import math
from typing import Any, Optional

import aiohttp

from artfolio.core.errors import TransportError
from artfolio.integrations import http_client as http_module

logger = logging.getLogger(__name__)


async def post_to_vendor(
    provider: str,
    url: str,
    timeout_sec: float,
    **request_kwargs: Any,
) -> Optional[Any]:
    timeout = aiohttp.ClientTimeout(total=timeout_sec)
    try:
        async with http_module.request_session() as sess:
            async with sess.post(url, timeout=timeout, **request_kwargs) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.error(f"[{provider.upper()}] HTTP {response.status}: {body[:200]}")
                    raise TransportError(
                        f"{provider} returned HTTP {response.status}",
                        provider=provider,
                        status=response.status,
                    )
                raw = await response.text()
    except asyncio.TimeoutError:
        logger.error(f"[{provider.upper()}] Timed out after {timeout_sec}s")
        raise TransportError(f"{provider} timed out after {timeout_sec}s", provider=provider)
    except aiohttp.ClientError as e:
        logger.error(f"[{provider.upper()}] Connection error: {e}")
        raise TransportError(f"Error reaching {provider}: {e}", provider=provider) from e

    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"[{provider.upper()}] Non-JSON response body ({len(raw)} bytes)")
        return None


def as_probability(value: Any) -> Optional[float]:
    """Returns value as a probability in [0, 1], or None when the vendor sent anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    score = float(value)
    if not math.isfinite(score) or not 0.0 <= score <= 1.0:
        return None
    return score
