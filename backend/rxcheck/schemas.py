"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, Field
from typing import Optional, List

from rxcheck.constants import SeverityLevel


# Interaction Schemas
class InteractionFinding(BaseModel):
    """One interaction warning between two named entities."""
    drug_a: str = Field(..., alias="drugA")
    drug_b: str = Field(..., alias="drugB")
    interaction_type: str = Field(..., alias="interactionType")
    severity: SeverityLevel
    description: str

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def pair(self) -> frozenset:
        """Unordered pair of the two names, compared exactly."""
        return frozenset((self.drug_a, self.drug_b))


class InteractionRequest(BaseModel):
    """Request to check interactions among a list of medicines."""
    medicines: List[str] = Field(..., description="Medicine names as written or detected")


class InteractionListResponse(BaseModel):
    """Response for an interaction check."""
    interactions: List[InteractionFinding]
    total_interactions: int
    highest_severity: Optional[SeverityLevel] = None


# Medicine Schemas
class MedicineDetails(BaseModel):
    """Label details for one medicine."""
    name: str
    purpose: str
    indications: str
    dosage: str
    warnings: str
    side_effects: List[str] = []
    interactions: List[str] = []
    risk_level: SeverityLevel


class MatchRequest(BaseModel):
    """Request to detect medicine names in free text."""
    text: str = Field(..., description="Raw recognized prescription text")


class MatchResponse(BaseModel):
    """Medicines detected in free text."""
    detected_medicines: List[str]
    total_detected: int


# OCR Schemas
class UploadResponse(BaseModel):
    """Response from prescription image processing."""
    success: bool = True
    detected_medicines: List[str]
    details: List[MedicineDetails]
    ocr_text: str


class OCRRequest(BaseModel):
    """Request for OCR processing of an inline image."""
    image_base64: str = Field(..., description="Base64 encoded image")
