"""
Detector contract shared by every AI-content provider.

A provider implements the checks it supports and raises
CapabilityUnsupportedError for the rest, so a misrouted call fails loudly
instead of returning a fake pass.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    IMAGE = "image"
    TEXT = "text"


class DetectionResult(BaseModel):
    """Outcome of one detection call. Scores are not comparable across providers."""

    model_config = ConfigDict(frozen=True)

    passed: bool
    confidence: float = Field(description="1 - AI probability; how likely the content is human-made")
    raw_score: float = Field(description="Provider-specific AI probability")
    provider: str
    details: dict[str, Any] = Field(default_factory=dict)


class AIDetector(ABC):

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def check_image(self, image_bytes: bytes, filename: str) -> DetectionResult:
        pass

    @abstractmethod
    async def check_text(self, text: str) -> DetectionResult:
        pass
