from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WorkKind(str, Enum):
    ESSAY = "essay"
    IMAGE = "image"


class EssayCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    body: str
    description: Optional[str] = Field(None, max_length=2000)


class ImageWorkCreate(BaseModel):
    """Form fields that accompany an image upload."""
    title: str = Field(min_length=1, max_length=200)
    image_path: str = Field(min_length=1, description="Storage key the client uploads the media to")
    description: Optional[str] = Field(None, max_length=2000)


class DetectionSummary(BaseModel):
    provider: str
    score: float


class WorkResponse(BaseModel):
    id: str
    author_id: str
    kind: WorkKind
    title: str
    body: Optional[str] = None
    image_path: Optional[str] = None
    description: Optional[str] = None
    detection: Optional[DetectionSummary] = None
    created_at: Optional[datetime] = None


class DeleteWorkResponse(BaseModel):
    success: bool
    image_path: Optional[str] = None
