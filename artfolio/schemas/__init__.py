from artfolio.schemas.detection import CheckResponse, DetectorStatusResponse, TextCheckRequest
from artfolio.schemas.works import (
    DeleteWorkResponse,
    DetectionSummary,
    EssayCreateRequest,
    ImageWorkCreate,
    WorkKind,
    WorkResponse,
)

__all__ = [
    "CheckResponse",
    "DetectorStatusResponse",
    "TextCheckRequest",
    "DeleteWorkResponse",
    "DetectionSummary",
    "EssayCreateRequest",
    "ImageWorkCreate",
    "WorkKind",
    "WorkResponse",
]
