"""
Publish gate: nothing reaches the `works` collection until its content has
been checked.

Three outcomes reach the caller:
  - passed: the work is written and returned.
  - ContentRejectedError: the check ran and the content looks AI-generated.
  - DetectionError (TransportError, ConfigurationError, ...): the check could
    not run. Nothing is written either way.
"""

import logging
from typing import Optional, Union

from artfolio.core.content_validator import validate_image_upload, validate_text
from artfolio.core.errors import ContentRejectedError
from artfolio.detection.router import Content, DetectionRouter
from artfolio.detection.types import ContentType, DetectionResult
from artfolio.schemas.works import EssayCreateRequest, ImageWorkCreate, WorkKind
from artfolio.services import works_service

logger = logging.getLogger(__name__)


async def check_content(
    router: DetectionRouter,
    content_type: Union[ContentType, str],
    content: Content,
    filename: Optional[str] = None,
) -> DetectionResult:
    """Validates and scores content; a failing score is returned, not raised."""
    if content_type == ContentType.TEXT and isinstance(content, str):
        validate_text(content)
    elif content_type == ContentType.IMAGE and isinstance(content, (bytes, bytearray)):
        validate_image_upload(filename or "", bytes(content))

    result = await router.detect(content_type, content, filename)
    logger.info(
        f"[DETECT] {result.provider}: passed={result.passed} "
        f"score={result.raw_score:.3f} confidence={result.confidence:.3f}"
    )
    return result


async def gate_content(
    router: DetectionRouter,
    content_type: Union[ContentType, str],
    content: Content,
    filename: Optional[str] = None,
) -> DetectionResult:
    result = await check_content(router, content_type, content, filename)
    if not result.passed:
        logger.info(f"[PUBLISH] Rejected: {round(result.raw_score * 100)}% AI-generated ({result.provider})")
        raise ContentRejectedError(result)
    return result


async def publish_essay(router: DetectionRouter, author_id: str, payload: EssayCreateRequest) -> dict:
    result = await gate_content(router, ContentType.TEXT, payload.body)
    return works_service.create_work(
        author_id,
        WorkKind.ESSAY,
        payload.title,
        result,
        body=payload.body,
        description=payload.description,
    )


async def publish_image_work(
    router: DetectionRouter,
    author_id: str,
    payload: ImageWorkCreate,
    image_bytes: bytes,
    filename: str,
) -> dict:
    result = await gate_content(router, ContentType.IMAGE, image_bytes, filename)
    return works_service.create_work(
        author_id,
        WorkKind.IMAGE,
        payload.title,
        result,
        image_path=payload.image_path,
        description=payload.description,
    )
