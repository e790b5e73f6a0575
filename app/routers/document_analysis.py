"""
⚖️ Document Analysis API Router
================================
REST endpoints over the legal-risk and authenticity engines.
OCR happens upstream; clients send the extracted text alongside the scan.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from app.core.config import Settings, get_settings
from app.core.errors import DocumentTooLargeError, UnsupportedDocumentError
from app.services.document_analysis import get_analysis_engine, get_pattern_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["Document Analysis"])

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "application/pdf"}


# =============================================================================
# Request Models
# =============================================================================

class LegalAnalysisRequest(BaseModel):
    """OCR text to assess for legal risk."""
    text: Optional[str] = Field(None, description="Extracted document text")


# =============================================================================
# Helpers
# =============================================================================

async def _read_upload(document: Optional[UploadFile], settings: Settings) -> bytes:
    if document is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    extension = Path(document.filename or "").suffix.lower().lstrip(".")
    if extension not in settings.allowed_extensions_set:
        raise UnsupportedDocumentError(
            f"Only {', '.join(sorted(settings.allowed_extensions_set)).upper()} files are allowed"
        )
    if document.content_type and document.content_type not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedDocumentError(f"Unsupported content type: {document.content_type}")

    content = await document.read()
    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(content) > settings.max_upload_bytes:
        raise DocumentTooLargeError(f"File too large (max {settings.max_upload_size_mb}MB)")
    return content


def _require_text(text: Optional[str], detail: str) -> str:
    if not text or not text.strip():
        raise HTTPException(status_code=400, detail=detail)
    return text


async def _run_bounded(settings: Settings, func: Callable[..., Any], *args: Any) -> Any:
    """Run a blocking pipeline off the event loop, giving up after the configured timeout."""
    try:
        return await asyncio.wait_for(
            run_in_threadpool(func, *args),
            timeout=settings.analysis_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.error("%s exceeded %.1fs", getattr(func, "__name__", "analysis"), settings.analysis_timeout_seconds)
        raise HTTPException(status_code=504, detail="Document analysis timed out")


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/analyze")
async def analyze_legal(request: LegalAnalysisRequest, settings: Settings = Depends(get_settings)):
    """
    Legal risk assessment of extracted text.

    Returns document type, up to 5 dangerous clauses (strongest first),
    a 0-10 risk score, warnings and a plain-language summary.
    """
    text = _require_text(request.text, "Text is required")
    engine = get_analysis_engine()
    analysis = await _run_bounded(settings, engine.analyze_legal, text)
    return {"success": True, "analysis": analysis.to_dict()}


@router.post("/security-check")
async def security_check(
    document: Optional[UploadFile] = File(None),
    extracted_text: Optional[str] = Form(None, alias="extractedText"),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticity assessment of an uploaded scan (JPEG, PNG or PDF).

    Returns SHA-256 fingerprint, QR verification, security markers,
    a 0-100 authenticity score, flags and recommendations.
    """
    content = await _read_upload(document, settings)
    text = _require_text(extracted_text, "Extracted text is required")
    engine = get_analysis_engine()
    security = await _run_bounded(settings, engine.analyze_security, content, text)
    return {"success": True, "security": security.to_dict()}


@router.post("/full-analysis")
async def full_analysis(
    document: Optional[UploadFile] = File(None),
    extracted_text: Optional[str] = Form(None, alias="extractedText"),
    settings: Settings = Depends(get_settings),
):
    """Legal and security assessments of the same upload, computed in parallel."""
    content = await _read_upload(document, settings)
    text = _require_text(extracted_text, "Extracted text is required")
    engine = get_analysis_engine()
    result = await _run_bounded(settings, engine.analyze_document, content, text)
    return {"success": True, **result.to_dict()}


@router.get("/patterns")
async def get_patterns():
    """Document types, clause signatures and security vocabularies in use."""
    return {"success": True, "patterns": get_pattern_catalog().to_dict()}


@router.get("/health")
async def health():
    return {"status": "healthy", "service": "document_analysis"}
