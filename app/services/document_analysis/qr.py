"""
QR Extractor & Validator
========================

Locates a QR symbol on the scanned page, decodes it, and checks the payload:
1. Validity - does it point at a government / registration authority?
2. Type - Aadhaar, registration, certificate, plain URL or generic data
3. Text match - are the payload's significant words present in the OCR text?
   A QR that doesn't agree with the printed page is a spoofing signal.

QR analysis is best-effort. A page without a QR code is a normal outcome, and
an undecodable or corrupt image degrades to an ``error`` finding instead of
failing the security analysis.
"""

import io
import logging
import re
from typing import Iterable, Optional, Protocol

import cv2
import numpy as np
from PIL import Image

from .catalog import PatternCatalog
from .models import QRFinding, QRType, TextMatch

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
PDF_RENDER_ZOOM = 2.0  # ~144 dpi, enough for QR modules on an A4 scan

# Payload tokenisation: whitespace plus URL / record delimiters
TOKEN_SPLIT = re.compile(r"[\s/\\?&=#:;,.|]+")
MIN_TOKEN_LENGTH = 4  # tokens must be longer than 3 characters
TEXT_MATCH_THRESHOLD = 50  # matched when score is strictly above


# =============================================================================
# IMAGE LOADING & DECODING
# =============================================================================

class QRDecoder(Protocol):
    def decode(self, gray: np.ndarray) -> Optional[str]:
        """Return the payload of one QR symbol in a grayscale image, or None."""
        ...


class OpenCVQRDecoder:
    """cv2.QRCodeDetector wrapper. A detector is created per call, they are not thread-safe."""

    def decode(self, gray: np.ndarray) -> Optional[str]:
        detector = cv2.QRCodeDetector()
        data, points, _ = detector.detectAndDecode(gray)
        if points is None or not data:
            return None
        return data


def _render_pdf_first_page(document_bytes: bytes) -> bytes:
    """Rasterise page 1 of a PDF to PNG bytes."""
    import fitz  # PyMuPDF

    with fitz.open(stream=document_bytes, filetype="pdf") as pdf:
        if pdf.page_count == 0:
            raise ValueError("PDF has no pages")
        page = pdf.load_page(0)
        pixmap = page.get_pixmap(matrix=fitz.Matrix(PDF_RENDER_ZOOM, PDF_RENDER_ZOOM))
        return pixmap.tobytes("png")


def load_grayscale(document_bytes: bytes) -> np.ndarray:
    """Decode an image (or the first page of a PDF) into a single-channel uint8 array."""
    if not document_bytes:
        raise ValueError("Empty document")

    image_bytes = document_bytes
    if document_bytes.startswith(PDF_MAGIC):
        image_bytes = _render_pdf_first_page(document_bytes)

    with Image.open(io.BytesIO(image_bytes)) as image:
        gray = image.convert("L")
    return np.asarray(gray, dtype=np.uint8)


# =============================================================================
# PAYLOAD CHECKS
# =============================================================================

def validate_qr_payload(data: Optional[str], indicators: Iterable[str]) -> bool:
    """True if the payload mentions any official-domain / registration indicator."""
    if not data:
        return False
    data_lower = data.lower()
    return any(indicator.lower() in data_lower for indicator in indicators)


def identify_qr_type(data: Optional[str]) -> QRType:
    """Classify a payload. Checks run in priority order, first hit wins."""
    if not data:
        return QRType.NONE

    data_lower = data.lower()
    if "uidai" in data_lower or "aadhaar" in data_lower:
        return QRType.AADHAAR
    if "registration" in data_lower:
        return QRType.REGISTRATION
    if "certificate" in data_lower:
        return QRType.CERTIFICATE
    if data_lower.startswith("http"):
        return QRType.URL
    return QRType.GENERAL


def payload_tokens(data: str) -> list[str]:
    """Significant words of a payload: anything longer than 3 characters."""
    return [token for token in TOKEN_SPLIT.split(data) if len(token) >= MIN_TOKEN_LENGTH]


def verify_qr_with_text(data: Optional[str], extracted_text: Optional[str]) -> TextMatch:
    """Share of the payload's significant words that also appear in the OCR text."""
    if not data or not extracted_text:
        return TextMatch()

    tokens = payload_tokens(data)
    if not tokens:
        return TextMatch()

    text_lower = extracted_text.lower()
    matched_words = sum(1 for token in tokens if token.lower() in text_lower)
    score = round_half_up(matched_words / len(tokens) * 100)
    return TextMatch(
        matched=score > TEXT_MATCH_THRESHOLD,
        score=score,
        matched_words=matched_words,
        total_words=len(tokens),
    )


def round_half_up(value: float) -> int:
    """Round halves away from zero (built-in round() rounds them to even)."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


# =============================================================================
# ANALYZER
# =============================================================================

class QRCodeAnalyzer:
    def __init__(self, catalog: PatternCatalog, decoder: Optional[QRDecoder] = None):
        self.catalog = catalog
        self.decoder = decoder or OpenCVQRDecoder()

    def analyze(self, document_bytes: bytes, extracted_text: Optional[str]) -> QRFinding:
        try:
            gray = load_grayscale(document_bytes)
            data = self.decoder.decode(gray)
        except Exception as e:
            logger.warning("QR analysis failed, continuing without QR signal: %s", e)
            return QRFinding.failed(str(e) or type(e).__name__)

        if not data:
            logger.debug("No QR code found on %dx%d page", gray.shape[1], gray.shape[0])
            return QRFinding.not_found()

        finding = QRFinding(
            found=True,
            data=data,
            is_valid=validate_qr_payload(data, self.catalog.security.qr_indicators),
            type=identify_qr_type(data),
            text_match=verify_qr_with_text(data, extracted_text),
        )
        logger.info(
            "QR decoded: type=%s valid=%s text_match=%d%%",
            finding.type.value, finding.is_valid, finding.text_match.score,
        )
        return finding
