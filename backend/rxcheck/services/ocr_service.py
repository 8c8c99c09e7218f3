"""
OCR Service for reading prescription images.

Uses Pillow to decode the image and Tesseract for OCR. Detecting medicine
names in the recognized text is left to the name matcher.
"""
import base64
import binascii
import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class OCRError(Exception):
    """Raised when an image cannot be decoded or recognized."""


class PrescriptionOCRService:
    """
    Service for extracting raw text from prescription images.
    """

    def __init__(self, tesseract_cmd: Optional[str] = None, language: str = "eng"):
        """
        Initialize the OCR service.

        Args:
            tesseract_cmd: Path to tesseract executable (Windows)
            language: Tesseract language code
        """
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.language = language

    def load_image(self, image_bytes: bytes) -> Image.Image:
        """Decode image bytes into an RGB Pillow image."""
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise OCRError(f"Could not decode image: {e}") from e

        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        return image

    def extract_text(self, image_bytes: bytes) -> str:
        """
        Extract text from an image.

        Args:
            image_bytes: Encoded image (JPEG, PNG, ...)

        Returns:
            Recognized text, stripped
        """
        image = self.load_image(image_bytes)
        logger.info("Starting OCR processing...")
        try:
            text = pytesseract.image_to_string(image, lang=self.language)
        except pytesseract.TesseractError as e:
            raise OCRError(f"Tesseract failed: {e}") from e
        except pytesseract.TesseractNotFoundError as e:
            raise OCRError("Tesseract is not installed or not on PATH") from e

        text = text.strip()
        logger.info(f"OCR extracted {len(text)} characters")
        logger.debug(f"OCR text: {text[:500]}")
        return text

    def extract_from_base64(self, base64_string: str) -> str:
        """
        Extract text from a base64 encoded image.

        Args:
            base64_string: Base64 encoded image, optionally a data URL
        """
        # Remove data URL prefix if present
        if ',' in base64_string:
            base64_string = base64_string.split(',', 1)[1]

        try:
            image_bytes = base64.b64decode(base64_string, validate=True)
        except (binascii.Error, ValueError) as e:
            raise OCRError(f"Invalid base64 image: {e}") from e

        return self.extract_text(image_bytes)


def create_ocr_service(tesseract_cmd: Optional[str] = None, language: str = "eng") -> PrescriptionOCRService:
    """Factory function to create OCR service."""
    return PrescriptionOCRService(tesseract_cmd, language)
