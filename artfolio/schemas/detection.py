from pydantic import BaseModel, Field


class TextCheckRequest(BaseModel):
    text: str


class CheckResponse(BaseModel):
    passed: bool
    score: float = Field(description="Provider AI probability, shown as 'N% AI-generated'")
    confidence: float = Field(description="1 - score")
    provider: str


class DetectorStatusResponse(BaseModel):
    image: bool
    text: bool
