import base64
import io

import pytest
import pytesseract
from PIL import Image

from rxcheck.services.ocr_service import OCRError, PrescriptionOCRService


def png_bytes(mode="RGB"):
    buffer = io.BytesIO()
    Image.new(mode, (32, 16), color=0).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def ocr():
    return PrescriptionOCRService(language="eng")


def test_load_image_converts_to_rgb(ocr):
    image = ocr.load_image(png_bytes("RGBA"))
    assert image.mode == "RGB"


def test_undecodable_image_raises(ocr):
    with pytest.raises(OCRError):
        ocr.load_image(b"not an image")


def test_extract_text_strips_output(ocr, monkeypatch):
    calls = {}

    def fake_image_to_string(image, lang=None):
        calls["lang"] = lang
        return "  Aspirin 81mg daily \n\n"

    monkeypatch.setattr(pytesseract, "image_to_string", fake_image_to_string)
    assert ocr.extract_text(png_bytes()) == "Aspirin 81mg daily"
    assert calls["lang"] == "eng"


def test_missing_tesseract_raises_ocr_error(ocr, monkeypatch):
    def missing(image, lang=None):
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "image_to_string", missing)
    with pytest.raises(OCRError):
        ocr.extract_text(png_bytes())


def test_extract_from_data_url(ocr, monkeypatch):
    monkeypatch.setattr(pytesseract, "image_to_string", lambda image, lang=None: "Metformin 500")
    encoded = base64.b64encode(png_bytes()).decode("ascii")
    assert ocr.extract_from_base64(f"data:image/png;base64,{encoded}") == "Metformin 500"


def test_invalid_base64_raises(ocr):
    with pytest.raises(OCRError):
        ocr.extract_from_base64("@@not-base64@@")


def test_decompression_bomb_raises_ocr_error(ocr, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(OCRError):
        ocr.load_image(png_bytes())
