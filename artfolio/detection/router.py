"""
DetectionRouter — picks the detector for a content type and invokes it.

The FastAPI lifespan builds one router and stores it on `app.state`; route
handlers receive it through `get_detection_router`. Each modality's detector
is built on first use and memoized. A failed build (missing credential) is
not cached, so fixing the environment and retrying works without a restart,
and a broken modality never blocks the other one.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from fastapi import Request

from artfolio.core.errors import ConfigurationError, ContentTypeMismatchError
from artfolio.detection.gptzero import GPTZeroDetector
from artfolio.detection.sightengine import SightengineDetector
from artfolio.detection.types import AIDetector, ContentType, DetectionResult

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_FILENAME = "image"

Content = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class Strategy:
    factory: Callable[[], AIDetector]
    accepts: tuple[type, ...]
    invoke: Callable[[AIDetector, Content, str], Awaitable[DetectionResult]]
    expected: str


def _invoke_image(detector: AIDetector, content: Content, filename: str) -> Awaitable[DetectionResult]:
    return detector.check_image(bytes(content), filename)


def _invoke_text(detector: AIDetector, content: Content, filename: str) -> Awaitable[DetectionResult]:
    return detector.check_text(content)


def default_strategies() -> dict[ContentType, Strategy]:
    return {
        ContentType.IMAGE: Strategy(
            factory=SightengineDetector,
            accepts=(bytes, bytearray, memoryview),
            invoke=_invoke_image,
            expected="Image content must be bytes",
        ),
        ContentType.TEXT: Strategy(
            factory=GPTZeroDetector,
            accepts=(str,),
            invoke=_invoke_text,
            expected="Text content must be a string",
        ),
    }


class DetectionRouter:

    def __init__(self, strategies: Optional[dict[ContentType, Strategy]] = None):
        self._strategies = strategies if strategies is not None else default_strategies()
        self._detectors: dict[ContentType, AIDetector] = {}

    async def detect(
        self,
        content_type: Union[ContentType, str],
        content: Content,
        filename: Optional[str] = None,
    ) -> DetectionResult:
        kind = _coerce_content_type(content_type)
        strategy = self._strategies.get(kind)
        if strategy is None:
            raise ContentTypeMismatchError(f"No detector registered for content type '{kind.value}'")
        if not isinstance(content, strategy.accepts):
            raise ContentTypeMismatchError(strategy.expected)

        detector = self.get_detector(kind)
        return await strategy.invoke(detector, content, filename or DEFAULT_IMAGE_FILENAME)

    def get_detector(self, content_type: ContentType) -> AIDetector:
        detector = self._detectors.get(content_type)
        if detector is None:
            # Concurrent first calls may each build one; the last assignment wins.
            detector = self._strategies[content_type].factory()
            self._detectors[content_type] = detector
            logger.info(f"[DETECT] {detector.provider_name} detector ready for {content_type.value}")
        return detector

    def warm_up(self) -> dict[str, bool]:
        """Builds every detector once at startup; a missing credential only disables its modality."""
        for content_type in self._strategies:
            try:
                self.get_detector(content_type)
            except ConfigurationError as e:
                logger.warning(f"[STARTUP] {content_type.value} detection unavailable: {e}")
        return self.available()

    def available(self) -> dict[str, bool]:
        return {ct.value: ct in self._detectors for ct in self._strategies}


def _coerce_content_type(content_type: Union[ContentType, str]) -> ContentType:
    try:
        return ContentType(content_type)
    except ValueError:
        raise ContentTypeMismatchError(f"Unknown content type '{content_type}'")


def get_detection_router(request: Request) -> DetectionRouter:
    """FastAPI dependency returning the router built during the lifespan."""
    router = getattr(request.app.state, "detection_router", None)
    if router is None:
        router = DetectionRouter()
        request.app.state.detection_router = router
    return router
