"""
Work routes. Creation goes through the publish gate; a work whose content
fails detection, or cannot be checked, is never written.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError

from artfolio.api.detection import rate_limited_user
from artfolio.core.auth import get_current_user
from artfolio.core.errors import BadRequestError
from artfolio.detection.router import DetectionRouter, get_detection_router
from artfolio.schemas.works import DeleteWorkResponse, EssayCreateRequest, ImageWorkCreate, WorkResponse
from artfolio.services import works_service
from artfolio.services.publish_service import publish_essay, publish_image_work

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/works", tags=["Works"])


@router.post("", response_model=WorkResponse, status_code=201)
async def create_essay(
    payload: EssayCreateRequest,
    uid: str = Depends(rate_limited_user),
    detection_router: DetectionRouter = Depends(get_detection_router),
):
    return await publish_essay(detection_router, uid, payload)


@router.post("/image", response_model=WorkResponse, status_code=201)
async def create_image_work(
    file: UploadFile = File(...),
    title: str = Form(...),
    image_path: str = Form(...),
    description: Optional[str] = Form(None),
    uid: str = Depends(rate_limited_user),
    detection_router: DetectionRouter = Depends(get_detection_router),
):
    try:
        payload = ImageWorkCreate(title=title, image_path=image_path, description=description)
    except ValidationError as e:
        raise BadRequestError("Invalid work fields", details={"fields": [err["loc"][-1] for err in e.errors()]})

    content = await file.read()
    return await publish_image_work(detection_router, uid, payload, content, file.filename or "image")


@router.get("/{work_id}", response_model=WorkResponse)
async def get_work(work_id: str):
    return works_service.get_work(work_id)


@router.delete("/{work_id}", response_model=DeleteWorkResponse)
async def delete_work(work_id: str, uid: str = Depends(get_current_user)):
    image_path = works_service.delete_work(work_id, uid)
    return {"success": True, "image_path": image_path}
