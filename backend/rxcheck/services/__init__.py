"""Services module for prescription scanning and interaction checks."""

from rxcheck.services.name_matcher import (
    MedicineNameMatcher,
    create_name_matcher,
    match_medicines,
)
from rxcheck.services.interaction_service import (
    InteractionResolver,
    create_interaction_resolver,
    find_interactions,
)
from rxcheck.services.ocr_service import OCRError, PrescriptionOCRService, create_ocr_service
from rxcheck.services.label_fetcher import MedicineInfoFetcher, create_medicine_info_fetcher

__all__ = [
    "MedicineNameMatcher",
    "create_name_matcher",
    "match_medicines",
    "InteractionResolver",
    "create_interaction_resolver",
    "find_interactions",
    "OCRError",
    "PrescriptionOCRService",
    "create_ocr_service",
    "MedicineInfoFetcher",
    "create_medicine_info_fetcher",
]
