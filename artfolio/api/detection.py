"""
Detection routes used by the authoring UI before it creates a work.

POST /api/detect/text   { "text": "..." }   -> { passed, score, confidence, provider }
POST /api/detect/image  multipart 'file'    -> same
GET  /api/detect/status                     -> which modalities are configured

A failing score is a normal 200 response with passed=false; errors mean the
check itself could not run.
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from artfolio.core.auth import get_current_user
from artfolio.core.rate_limiter import check_rate_limit
from artfolio.detection.router import DetectionRouter, get_detection_router
from artfolio.detection.types import ContentType, DetectionResult
from artfolio.schemas.detection import CheckResponse, DetectorStatusResponse, TextCheckRequest
from artfolio.services.publish_service import check_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/detect", tags=["Detection"])


async def rate_limited_user(uid: str = Depends(get_current_user)) -> str:
    check_rate_limit(uid)
    return uid


def _to_response(result: DetectionResult) -> CheckResponse:
    return CheckResponse(
        passed=result.passed,
        score=result.raw_score,
        confidence=result.confidence,
        provider=result.provider,
    )


@router.post("/text", response_model=CheckResponse)
async def check_text(
    payload: TextCheckRequest,
    uid: str = Depends(rate_limited_user),
    detection_router: DetectionRouter = Depends(get_detection_router),
):
    result = await check_content(detection_router, ContentType.TEXT, payload.text)
    return _to_response(result)


@router.post("/image", response_model=CheckResponse)
async def check_image(
    file: UploadFile = File(...),
    uid: str = Depends(rate_limited_user),
    detection_router: DetectionRouter = Depends(get_detection_router),
):
    content = await file.read()
    filename = file.filename or "image"
    logger.info(f"[DETECT] {uid} submitted {filename} ({len(content)} bytes)")
    result = await check_content(detection_router, ContentType.IMAGE, content, filename)
    return _to_response(result)


@router.get("/status", response_model=DetectorStatusResponse)
async def detector_status(detection_router: DetectionRouter = Depends(get_detection_router)):
    return detection_router.available()
