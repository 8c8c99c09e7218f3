"""
Prescription Scan & Interaction Checker API

Main FastAPI application entry point.
"""
from fastapi import FastAPI, Depends, UploadFile, File, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging
from datetime import datetime, timezone

from rxcheck.config import get_settings
from rxcheck.constants import ErrorCodes, Messages
from rxcheck.exceptions import OCRProcessingError, ValidationError
from rxcheck.schemas import (
    InteractionRequest, InteractionListResponse,
    MatchRequest, MatchResponse,
    MedicineDetails,
    OCRRequest, UploadResponse,
)
from rxcheck.services import (
    MedicineInfoFetcher,
    OCRError,
    PrescriptionOCRService,
    create_medicine_info_fetcher,
    create_ocr_service,
    find_interactions,
    match_medicines,
)
from rxcheck.services.interaction_service import highest_severity, sort_by_severity
from rxcheck.services.rate_limiter import upload_rate_limit

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

LOGGED_PREFIXES = ("/upload", "/interactions", "/medicine")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Prescription Scan & Interaction Checker

    Reads a prescription photo, detects the medicines on it and warns about
    interactions between them.

    ### Features:
    - **Prescription Upload**: Extract medicine names from photos using OCR
    - **Medicine Details**: Purpose, dosage and warnings from FDA drug labels
    - **Interaction Check**: Pairwise warnings plus alerts against substances such as alcohol

    ### Severity Levels:
    - **Low**: Minor effect, stay aware
    - **Medium**: Use caution, monitor for effects
    - **High**: Significant risk, consult healthcare provider
    """,
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    """Log upload, medicine and interaction calls."""
    path = request.url.path
    if path.startswith(LOGGED_PREFIXES):
        client_ip = request.client.host if request.client else "unknown"
        logger.info({
            "event": "http_request",
            "path": path,
            "method": request.method,
            "client_ip": client_ip,
        })
    return await call_next(request)


# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============== Dependencies ==============

def get_ocr_service() -> PrescriptionOCRService:
    """Dependency to get the OCR service."""
    return create_ocr_service(settings.TESSERACT_CMD or None, settings.OCR_LANGUAGE)


def get_label_fetcher() -> MedicineInfoFetcher:
    """Dependency to get the OpenFDA label fetcher."""
    return create_medicine_info_fetcher()


# ============== Health Endpoints ==============

@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API health check."""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION
    }


# ============== Prescription Endpoints ==============

async def run_ocr(extract, image) -> str:
    """Run a blocking OCR call in the thread pool."""
    try:
        return await run_in_threadpool(extract, image)
    except OCRError as e:
        logger.error(f"Error processing image: {e}")
        raise OCRProcessingError(str(e))


async def describe_prescription(text: str, fetcher: MedicineInfoFetcher) -> UploadResponse:
    """Detect medicines in OCR text and look up their label details."""
    detected = match_medicines(text)

    details = []
    for medicine in detected:
        logger.info(f"Fetching info for: {medicine}")
        details.append(await fetcher.get_medicine_info(medicine))

    return UploadResponse(
        success=True,
        detected_medicines=detected,
        details=details,
        ocr_text=text,
    )


@app.post(
    "/upload",
    response_model=UploadResponse,
    tags=["Prescriptions"],
    dependencies=[Depends(upload_rate_limit)],
)
async def upload_prescription(
    file: Optional[UploadFile] = File(None),
    ocr_service: PrescriptionOCRService = Depends(get_ocr_service),
    fetcher: MedicineInfoFetcher = Depends(get_label_fetcher),
):
    """
    Extract medicines from an uploaded prescription image.

    Accepts image files (JPEG, PNG). The image is processed in memory only.
    """
    if file is None:
        raise ValidationError(Messages.NO_FILE_UPLOADED)

    if not file.content_type or not file.content_type.startswith("image/"):
        raise ValidationError(Messages.NOT_AN_IMAGE)

    contents = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if not contents:
        raise ValidationError(Messages.EMPTY_FILE)
    if len(contents) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(Messages.FILE_TOO_LARGE)

    text = await run_ocr(ocr_service.extract_text, contents)
    return await describe_prescription(text, fetcher)


@app.post(
    "/upload/base64",
    response_model=UploadResponse,
    tags=["Prescriptions"],
    dependencies=[Depends(upload_rate_limit)],
)
async def upload_prescription_base64(
    request: OCRRequest,
    ocr_service: PrescriptionOCRService = Depends(get_ocr_service),
    fetcher: MedicineInfoFetcher = Depends(get_label_fetcher),
):
    """
    Extract medicines from a base64 encoded prescription image.

    Data URLs (`data:image/png;base64,...`) are accepted.
    """
    text = await run_ocr(ocr_service.extract_from_base64, request.image_base64)
    return await describe_prescription(text, fetcher)


@app.post("/medicines/match", response_model=MatchResponse, tags=["Prescriptions"])
async def match_text(request: MatchRequest):
    """Detect known medicine names in already recognized text."""
    detected = match_medicines(request.text)
    return MatchResponse(detected_medicines=detected, total_detected=len(detected))


# ============== Medicine Endpoints ==============

@app.get("/medicine/{name}", response_model=MedicineDetails, tags=["Medicines"])
async def get_medicine(
    name: str,
    fetcher: MedicineInfoFetcher = Depends(get_label_fetcher),
):
    """
    Get label details for a medicine.

    Falls back to curated data when OpenFDA has no label for it.
    """
    return await fetcher.get_medicine_info(name)


# ============== Interaction Endpoints ==============

@app.post("/interactions", response_model=InteractionListResponse, tags=["Interactions"])
async def check_interactions(request: InteractionRequest, sort: Optional[str] = None):
    """
    Find interaction warnings among a list of medicines.

    Pass `sort=severity` to order warnings from High to Low.
    """
    interactions = find_interactions(request.medicines)

    if sort == "severity":
        interactions = sort_by_severity(interactions)

    return InteractionListResponse(
        interactions=interactions,
        total_interactions=len(interactions),
        highest_severity=highest_severity(interactions),
    )


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report a malformed medicine list as a 400, other bodies as FastAPI does."""
    if request.url.path == "/interactions":
        return JSONResponse(
            status_code=400,
            content={"detail": Messages.INVALID_MEDICINES, "error_code": ErrorCodes.VALIDATION_ERROR},
        )
    return await request_validation_exception_handler(request, exc)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("rxcheck.main:app", host="0.0.0.0", port=5000, reload=settings.DEBUG)
