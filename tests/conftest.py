"""
DocSentinel - Shared Test Fixtures
Provides reusable fixtures for the API client, sample documents and QR images.
"""

import io
import os
from typing import AsyncGenerator, Optional

import cv2
import numpy as np
import pytest
from httpx import AsyncClient, ASGITransport
from PIL import Image

# Configure test environment BEFORE importing app
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ANALYSIS_WORKERS"] = "3"

from app.main import app
from app.core.config import get_settings
from app.services.document_analysis import (
    DocumentAnalysisEngine,
    build_default_catalog,
)


# =============================================================================
# Image Helpers
# =============================================================================

def make_qr_png(payload: str, scale: int = 8, border: int = 40) -> bytes:
    """Render a QR code for ``payload`` as PNG bytes with a white quiet zone."""
    encoder = cv2.QRCodeEncoder.create()
    symbol = encoder.encode(payload)
    symbol = cv2.resize(
        symbol,
        (symbol.shape[1] * scale, symbol.shape[0] * scale),
        interpolation=cv2.INTER_NEAREST,
    )
    symbol = cv2.copyMakeBorder(symbol, border, border, border, border, cv2.BORDER_CONSTANT, value=255)
    ok, buffer = cv2.imencode(".png", symbol)
    assert ok
    return buffer.tobytes()


def make_blank_png(width: int = 320, height: int = 240) -> bytes:
    """A plain white page with nothing to decode."""
    buffer = io.BytesIO()
    Image.new("L", (width, height), 255).save(buffer, format="PNG")
    return buffer.getvalue()


class StubDecoder:
    """QR decoder returning a fixed payload, recording what it was given."""

    def __init__(self, payload: Optional[str]):
        self.payload = payload
        self.calls = 0

    def decode(self, gray: np.ndarray) -> Optional[str]:
        self.calls += 1
        assert gray.ndim == 2, "decoder must receive a single-channel image"
        return self.payload


class ExplodingDecoder:
    def decode(self, gray: np.ndarray) -> Optional[str]:
        raise RuntimeError("decoder crashed")


# =============================================================================
# Core Fixtures
# =============================================================================

@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def settings():
    """Get test settings."""
    return get_settings()


@pytest.fixture
def catalog():
    return build_default_catalog()


@pytest.fixture
def engine(catalog):
    """Engine with the real OpenCV decoder."""
    return DocumentAnalysisEngine(catalog=catalog)


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def blank_png() -> bytes:
    return make_blank_png()


@pytest.fixture
def sale_deed_text() -> str:
    """Property deed with a penalty and a forfeiture term."""
    return (
        "This sale deed is registered before the sub-registrar of the district. "
        "The purchaser shall pay a penalty and accept forfeiture of the deposit on breach."
    )


@pytest.fixture
def loan_agreement_text() -> str:
    return (
        "LOAN AGREEMENT. "
        "This agreement is made between the lender and the borrower for a loan of Rs 5,00,000. "
        "The borrower shall repay the principal with interest in monthly EMI instalments. "
        "Any payment that is overdue shall attract a late fee and additional interest. "
        "On default the lender may terminate this agreement and recover the collateral. "
        "The borrower shall be liable for all damages and shall indemnify the lender. "
        "A penalty and liquidated damages apply to any breach of these terms. "
        "The borrower may not assign or transfer this loan without consent."
    )


@pytest.fixture
def plain_letter_text() -> str:
    """Text with no security vocabulary at all."""
    return "Hello, this note confirms our meeting on Monday at the usual place."
