"""
Application-wide constants.
"""
from enum import Enum


class SeverityLevel(str, Enum):
    """Drug interaction severity levels, ordered Low < Medium < High."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return SEVERITY_RANKING[self]


SEVERITY_RANKING = {
    SeverityLevel.LOW: 1,
    SeverityLevel.MEDIUM: 2,
    SeverityLevel.HIGH: 3,
}


# API Response Messages
class Messages:
    """Standard API response messages."""
    NO_FILE_UPLOADED = "No file uploaded"
    NOT_AN_IMAGE = "File must be an image (JPEG, PNG, etc.)"
    EMPTY_FILE = "Uploaded file is empty"
    FILE_TOO_LARGE = "Uploaded file is too large"
    OCR_FAILED = "Failed to process image"
    INVALID_MEDICINES = "Invalid medicines array"
    RATE_LIMIT_EXCEEDED = "Rate limit exceeded. Please try again later."


# Default Limits
class Limits:
    """Limits applied when shaping label text."""
    PURPOSE_CHARS = 100
    INDICATIONS_CHARS = 200
    DOSAGE_CHARS = 100
    WARNINGS_CHARS = 150
    SIDE_EFFECTS = 3
    LABEL_INTERACTIONS = 2


# Cache TTL (Time To Live) in seconds
class CacheTTL:
    """Cache expiration times."""
    OPENFDA_LABEL = 21600  # 6 hours


# Error Codes
class ErrorCodes:
    """Standard error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    OCR_ERROR = "OCR_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
