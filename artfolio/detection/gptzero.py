"""
GPTZero text detector.

Scores an essay with GPTZero's `completely_generated_prob` for the first
document in the response. A missing or non-numeric probability counts as 0
(fail open) unless DETECTION_FAIL_CLOSED is set.
"""

import logging
from typing import Optional

from artfolio.config import settings
from artfolio.core.errors import CapabilityUnsupportedError, ConfigurationError, TransportError
from artfolio.detection.types import AIDetector, DetectionResult
from artfolio.detection.vendor import as_probability, post_to_vendor

logger = logging.getLogger(__name__)


class GPTZeroDetector(AIDetector):

    def __init__(
        self,
        api_key: Optional[str] = None,
        threshold: Optional[float] = None,
        timeout_sec: Optional[float] = None,
        fail_closed: Optional[bool] = None,
    ):
        api_key = api_key or settings.gptzero_api_key
        if not api_key:
            raise ConfigurationError("Missing GPTZero API key (GPTZERO_API_KEY)")
        self._api_key = api_key
        self.threshold = settings.text_ai_threshold if threshold is None else threshold
        self.timeout_sec = settings.detection_timeout_sec if timeout_sec is None else timeout_sec
        self.fail_closed = settings.detection_fail_closed if fail_closed is None else fail_closed

    @property
    def provider_name(self) -> str:
        return "gptzero"

    async def check_image(self, image_bytes: bytes, filename: str) -> DetectionResult:
        raise CapabilityUnsupportedError("GPTZero does not support image detection")

    async def check_text(self, text: str) -> DetectionResult:
        data = await post_to_vendor(
            self.provider_name,
            settings.gptzero_api_url,
            self.timeout_sec,
            json={"document": text},
            headers={"Content-Type": "application/json", "x-api-key": self._api_key},
        )

        ai_prob = _completely_generated_prob(data)
        if ai_prob is None:
            if self.fail_closed:
                raise TransportError("GPTZero returned a malformed response", provider=self.provider_name)
            logger.warning("[GPTZERO] Response missing completely_generated_prob; treating as 0")
            ai_prob = 0.0

        logger.info(f"[GPTZERO] {len(text)} chars scored {ai_prob:.3f} (threshold {self.threshold})")
        return DetectionResult(
            passed=ai_prob < self.threshold,
            confidence=1 - ai_prob,
            raw_score=ai_prob,
            provider=self.provider_name,
            details=data if isinstance(data, dict) else {},
        )


def _completely_generated_prob(data) -> Optional[float]:
    if not isinstance(data, dict):
        return None
    documents = data.get("documents")
    if not isinstance(documents, list) or not documents or not isinstance(documents[0], dict):
        return None
    return as_probability(documents[0].get("completely_generated_prob"))
