"""
Error taxonomy.

Two families live here:

  - AppError and its subclasses are HTTP-facing: each carries a status code,
    a machine-readable code and a user-facing message, and renders itself as
    {"error": {"code", "message", "details"}}.
  - DetectionError and its subclasses are raised by detectors and the router
    when a check could not be performed at all. The publish gate relies on
    them being distinct from ContentRejectedError, which means the check ran
    and the content failed it.
"""

from typing import Any, Optional

from fastapi.responses import JSONResponse


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        body = {"code": self.code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return {"error": body}

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


class BadRequestError(AppError):
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str = "Invalid request", details: Optional[dict] = None):
        super().__init__(message, details)


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required", details: Optional[dict] = None):
        super().__init__(message, details)


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Permission denied", details: Optional[dict] = None):
        super().__init__(message, details)


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", details: Optional[dict] = None):
        super().__init__(message, details)


class ServiceUnavailableError(AppError):
    status_code = 503
    code = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str = "Service unavailable", details: Optional[dict] = None):
        super().__init__(message, details)


class ContentRejectedError(AppError):
    """The detector ran successfully and judged the content AI-generated."""

    status_code = 400
    code = "AI_CONTENT_DETECTED"

    def __init__(self, result):
        self.result = result
        self.score = result.raw_score
        self.confidence = result.confidence
        percent = round(result.raw_score * 100)
        super().__init__(
            f"This content appears to be {percent}% AI-generated and cannot be published",
            details={
                "score": result.raw_score,
                "confidence": result.confidence,
                "provider": result.provider,
                "retryable": False,
            },
        )


# Name used by the authoring UI's error codes.
AIContentDetectedError = ContentRejectedError


# ---------------------------------------------------------------------------
# Detector faults: "we could not check", as opposed to "we checked and it failed"
# ---------------------------------------------------------------------------


class DetectionError(Exception):
    status_code = 500
    code = "DETECTION_ERROR"
    retryable = False
    public_message = "Content verification failed unexpectedly."


class ConfigurationError(DetectionError):
    """A detector cannot be built because its credential is missing."""

    status_code = 503
    code = "DETECTOR_NOT_CONFIGURED"
    public_message = "Content verification is not available for this content type."


class CapabilityUnsupportedError(DetectionError):
    """The selected provider does not implement the requested check."""

    status_code = 500
    code = "DETECTION_UNSUPPORTED"
    public_message = "This content type cannot be verified by the configured provider."


class TransportError(DetectionError):
    """The vendor could not be reached or answered with an error."""

    status_code = 503
    code = "DETECTION_UNAVAILABLE"
    retryable = True
    public_message = "We could not verify this content right now. Please try again later."

    def __init__(self, message: str, provider: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status = status


class ContentTypeMismatchError(DetectionError, TypeError):
    """Content representation does not match the requested content type."""

    status_code = 400
    code = "BAD_REQUEST"

    @property
    def public_message(self) -> str:
        return str(self)


def detection_error_response(exc: DetectionError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.public_message,
                "details": {"retryable": exc.retryable},
            }
        },
    )
