"""
Sightengine image detector.

Uploads the image to Sightengine's `genai` model and reads
`type.ai_generated` (0..1). The filename only drives the multipart content
type and log lines; format checks happen in core.content_validator.
"""

import logging
import mimetypes
from typing import Optional

import aiohttp

from artfolio.config import settings
from artfolio.core.errors import CapabilityUnsupportedError, ConfigurationError, TransportError
from artfolio.detection.types import AIDetector, DetectionResult
from artfolio.detection.vendor import as_probability, post_to_vendor

logger = logging.getLogger(__name__)


class SightengineDetector(AIDetector):

    def __init__(
        self,
        api_user: Optional[str] = None,
        api_secret: Optional[str] = None,
        threshold: Optional[float] = None,
        timeout_sec: Optional[float] = None,
        fail_closed: Optional[bool] = None,
    ):
        api_user = api_user or settings.sightengine_api_user
        api_secret = api_secret or settings.sightengine_api_secret
        if not api_user or not api_secret:
            raise ConfigurationError(
                "Missing Sightengine credentials (SIGHTENGINE_API_USER / SIGHTENGINE_API_SECRET)"
            )
        self._api_user = api_user
        self._api_secret = api_secret
        self.threshold = settings.image_ai_threshold if threshold is None else threshold
        self.timeout_sec = settings.detection_timeout_sec if timeout_sec is None else timeout_sec
        self.fail_closed = settings.detection_fail_closed if fail_closed is None else fail_closed

    @property
    def provider_name(self) -> str:
        return "sightengine"

    async def check_text(self, text: str) -> DetectionResult:
        raise CapabilityUnsupportedError("Sightengine does not support text detection")

    async def check_image(self, image_bytes: bytes, filename: str) -> DetectionResult:
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        form = aiohttp.FormData()
        form.add_field("media", bytes(image_bytes), filename=filename, content_type=content_type)
        form.add_field("models", settings.sightengine_models)
        form.add_field("api_user", self._api_user)
        form.add_field("api_secret", self._api_secret)

        data = await post_to_vendor(
            self.provider_name,
            settings.sightengine_api_url,
            self.timeout_sec,
            data=form,
        )

        if isinstance(data, dict) and data.get("status") == "failure":
            error = data.get("error") or {}
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            logger.error(f"[SIGHTENGINE] API failure for {filename}: {message}")
            raise TransportError(f"Sightengine rejected the request: {message}", provider=self.provider_name)

        score = _ai_generated_score(data)
        if score is None:
            if self.fail_closed:
                raise TransportError("Sightengine returned a malformed response", provider=self.provider_name)
            logger.warning(f"[SIGHTENGINE] Response for {filename} missing type.ai_generated; treating as 0")
            score = 0.0

        logger.info(
            f"[SIGHTENGINE] {filename} ({content_type}, {len(image_bytes)} bytes) "
            f"scored {score:.3f} (threshold {self.threshold})"
        )
        return DetectionResult(
            passed=score < self.threshold,
            confidence=1 - score,
            raw_score=score,
            provider=self.provider_name,
            details=data if isinstance(data, dict) else {},
        )


def _ai_generated_score(data) -> Optional[float]:
    if not isinstance(data, dict):
        return None
    type_scores = data.get("type")
    if not isinstance(type_scores, dict):
        return None
    return as_probability(type_scores.get("ai_generated"))
