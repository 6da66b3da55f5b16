"""
Liveness and crawler routes. /health also reports which detection
modalities have working credentials, so a missing key shows up in probes
instead of on the first publish.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from artfolio.detection.router import DetectionRouter, get_detection_router

router = APIRouter(tags=["System"])


@router.get("/health")
async def health(detection_router: DetectionRouter = Depends(get_detection_router)):
    return {"status": "healthy", "detectors": detection_router.available()}


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    return "User-agent: *\nDisallow: /api/"
