"""Application configuration settings."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    APP_NAME: str = "Prescription Scan & Interaction Checker"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Cache / rate limiting backend
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    RATE_LIMIT_REQUESTS_PER_MIN: int = 30

    # OpenFDA drug label lookups
    OPENFDA_BASE_URL: str = "https://api.fda.gov/drug"
    OPENFDA_API_KEY: str = ""
    OPENFDA_TIMEOUT_SECONDS: float = 10.0

    # OCR Settings
    TESSERACT_CMD: str = ""  # e.g. C:\Program Files\Tesseract-OCR\tesseract.exe
    OCR_LANGUAGE: str = "eng"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
