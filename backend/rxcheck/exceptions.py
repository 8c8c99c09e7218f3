"""
Custom exception classes for the application.
"""
from fastapi import HTTPException, status
from typing import Optional

from rxcheck.constants import ErrorCodes, Messages


class PrescriptionServiceException(HTTPException):
    """Base exception for prescription scan and interaction errors."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An error occurred",
        error_code: Optional[str] = None
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code


class ValidationError(PrescriptionServiceException):
    """Raised when input validation fails."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=ErrorCodes.VALIDATION_ERROR
        )


class OCRProcessingError(PrescriptionServiceException):
    """Raised when an uploaded prescription image cannot be processed."""

    def __init__(self, reason: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": Messages.OCR_FAILED, "details": reason},
            error_code=ErrorCodes.OCR_ERROR
        )


class RateLimitError(PrescriptionServiceException):
    """Raised when rate limit is exceeded."""

    def __init__(self, detail: str = Messages.RATE_LIMIT_EXCEEDED):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            error_code=ErrorCodes.RATE_LIMIT_ERROR
        )
