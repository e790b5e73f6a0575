"""
DocSentinel - Document Analysis API Tests
Tests for /api/documents endpoints.
"""

from io import BytesIO

import pytest
from httpx import AsyncClient

from app.core.config import Settings, get_settings
from app.main import app

from conftest import make_qr_png

AADHAAR_URL = "https://uidai.gov.in/verify?id=123"


def _png_upload(content: bytes, name: str = "scan.png", content_type: str = "image/png"):
    return {"document": (name, BytesIO(content), content_type)}


# =============================================================================
# Service Endpoints
# =============================================================================

@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/api/documents/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "document_analysis"}


@pytest.mark.asyncio
async def test_patterns_lists_catalog(client: AsyncClient):
    """Catalog is exposed in declaration order."""
    response = await client.get("/api/documents/patterns")
    assert response.status_code == 200
    patterns = response.json()["patterns"]
    assert [d["type"] for d in patterns["documentTypes"]][0] == "property_deed"
    assert len(patterns["documentTypes"]) == 6
    assert len(patterns["clauses"]) == 5
    assert "specimen" in patterns["security"]["suspiciousTerms"]
    assert patterns["defaultLegalReference"] == "General Contract Law"


# =============================================================================
# Legal Analysis
# =============================================================================

class TestAnalyzeEndpoint:

    @pytest.mark.asyncio
    async def test_analyze_loan(self, client: AsyncClient, loan_agreement_text):
        response = await client.post("/api/documents/analyze", json={"text": loan_agreement_text})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True

        analysis = data["analysis"]
        assert analysis["documentType"]["type"] == "loan_agreement"
        assert analysis["documentType"]["riskLevel"] == "high"
        assert analysis["riskScore"] == 10
        assert len(analysis["clauses"]) == 5
        assert analysis["summary"].endswith("HIGH RISK: This document requires legal consultation before signing.")

        clause = analysis["clauses"][0]
        assert set(clause) == {"id", "type", "text", "explanation", "riskLevel", "legalReference", "matchStrength"}

    @pytest.mark.asyncio
    async def test_analyze_unknown_text(self, client: AsyncClient, plain_letter_text):
        response = await client.post("/api/documents/analyze", json={"text": plain_letter_text})
        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["documentType"] == {"type": "unknown", "confidence": 0.0, "riskLevel": None}
        assert analysis["clauses"] == []
        assert analysis["riskScore"] == 0
        assert analysis["warnings"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": "   "}])
    async def test_analyze_requires_text(self, client: AsyncClient, body):
        response = await client.post("/api/documents/analyze", json=body)
        assert response.status_code == 400
        assert response.json()["detail"] == "Text is required"


# =============================================================================
# Security Check
# =============================================================================

class TestSecurityCheckEndpoint:

    @pytest.mark.asyncio
    async def test_blank_scan(self, client: AsyncClient, blank_png, plain_letter_text):
        response = await client.post(
            "/api/documents/security-check",
            files=_png_upload(blank_png),
            data={"extractedText": plain_letter_text},
        )
        assert response.status_code == 200
        security = response.json()["security"]

        assert security["documentHash"]["algorithm"] == "SHA-256"
        assert security["documentHash"]["fileSize"] == len(blank_png)
        assert security["qrAnalysis"]["found"] is False
        assert security["qrAnalysis"]["type"] == "none"
        assert security["authenticityScore"] == 40
        assert {f["type"] for f in security["flags"]} == {"warning", "info"}

    @pytest.mark.asyncio
    async def test_scan_with_qr(self, client: AsyncClient):
        response = await client.post(
            "/api/documents/security-check",
            files=_png_upload(make_qr_png(AADHAAR_URL)),
            data={"extractedText": "Aadhaar card issued by UIDAI. Scan to verify."},
        )
        assert response.status_code == 200
        qr = response.json()["security"]["qrAnalysis"]
        assert qr["found"] is True
        assert qr["type"] == "Aadhaar Verification"
        assert qr["textMatch"]["matched"] is True

    @pytest.mark.asyncio
    async def test_rejects_unsupported_extension(self, client: AsyncClient):
        response = await client.post(
            "/api/documents/security-check",
            files=_png_upload(b"hello", name="notes.txt", content_type="text/plain"),
            data={"extractedText": "some text"},
        )
        assert response.status_code == 415
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "unsupported_document"

    @pytest.mark.asyncio
    async def test_rejects_mismatched_content_type(self, client: AsyncClient, blank_png):
        response = await client.post(
            "/api/documents/security-check",
            files=_png_upload(blank_png, content_type="text/plain"),
            data={"extractedText": "some text"},
        )
        assert response.status_code == 415

    @pytest.mark.asyncio
    async def test_requires_file(self, client: AsyncClient):
        response = await client.post("/api/documents/security-check", data={"extractedText": "some text"})
        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded"

    @pytest.mark.asyncio
    async def test_requires_text(self, client: AsyncClient, blank_png):
        response = await client.post("/api/documents/security-check", files=_png_upload(blank_png))
        assert response.status_code == 400
        assert response.json()["detail"] == "Extracted text is required"

    @pytest.mark.asyncio
    async def test_rejects_empty_file(self, client: AsyncClient):
        response = await client.post(
            "/api/documents/security-check",
            files=_png_upload(b""),
            data={"extractedText": "some text"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Empty file"

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(self, client: AsyncClient, blank_png):
        app.dependency_overrides[get_settings] = lambda: Settings(max_upload_size_mb=0)
        try:
            response = await client.post(
                "/api/documents/security-check",
                files=_png_upload(blank_png),
                data={"extractedText": "some text"},
            )
        finally:
            app.dependency_overrides.pop(get_settings, None)

        assert response.status_code == 413
        assert response.json()["error"] == "document_too_large"


# =============================================================================
# Full Analysis
# =============================================================================

@pytest.mark.asyncio
async def test_full_analysis(client: AsyncClient, blank_png, sale_deed_text):
    response = await client.post(
        "/api/documents/full-analysis",
        files=_png_upload(blank_png),
        data={"extractedText": sale_deed_text},
    )
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"success", "legal", "security"}
    assert data["legal"]["documentType"]["type"] == "property_deed"
    assert data["legal"]["riskScore"] == 5
    assert data["security"]["securityFeatures"]["officialSeals"] == ["registrar", "sub-registrar"]
    assert data["security"]["authenticityScore"] == 56


@pytest.mark.asyncio
async def test_full_analysis_requires_file(client: AsyncClient, sale_deed_text):
    response = await client.post("/api/documents/full-analysis", data={"extractedText": sale_deed_text})
    assert response.status_code == 400
