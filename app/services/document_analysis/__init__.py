"""
Legal Document Analysis
=======================

Two independent assessments of a scanned legal document:

- Legal risk: document type, dangerous clauses, warnings, 0-10 risk score
- Authenticity: SHA-256 fingerprint, QR verification, security markers,
  0-100 trust score with flags and recommendations

Usage:
    from app.services.document_analysis import analyze_legal, analyze_security

    legal = analyze_legal(ocr_text)
    security = analyze_security(upload_bytes, ocr_text)

    print(legal.summary)
    print(security.authenticity_score)
"""

from .catalog import (
    PatternCatalog,
    DocumentTypeSignature,
    ClauseSignature,
    SecurityVocabulary,
    build_default_catalog,
    get_pattern_catalog,
)
from .models import (
    RiskLevel,
    FlagKind,
    QRType,
    ClassificationResult,
    ClauseFinding,
    LegalWarning,
    LegalAnalysisResult,
    DocumentHash,
    TextMatch,
    QRFinding,
    SecurityFeatures,
    SecurityFlag,
    SecurityAnalysisResult,
    DocumentAnalysisResult,
)
from .classifier import TextClassifier
from .clauses import ClauseExtractor
from .risk import LegalRiskScorer
from .fingerprint import generate_document_hash, read_document_bytes
from .qr import QRCodeAnalyzer, QRDecoder, OpenCVQRDecoder
from .features import SecurityFeatureScanner
from .authenticity import AuthenticityScorer
from .engine import (
    DocumentAnalysisEngine,
    get_analysis_engine,
    analyze_legal,
    analyze_security,
    analyze_document,
)

__all__ = [
    "PatternCatalog",
    "DocumentTypeSignature",
    "ClauseSignature",
    "SecurityVocabulary",
    "build_default_catalog",
    "get_pattern_catalog",
    "RiskLevel",
    "FlagKind",
    "QRType",
    "ClassificationResult",
    "ClauseFinding",
    "LegalWarning",
    "LegalAnalysisResult",
    "DocumentHash",
    "TextMatch",
    "QRFinding",
    "SecurityFeatures",
    "SecurityFlag",
    "SecurityAnalysisResult",
    "DocumentAnalysisResult",
    "TextClassifier",
    "ClauseExtractor",
    "LegalRiskScorer",
    "generate_document_hash",
    "read_document_bytes",
    "QRCodeAnalyzer",
    "QRDecoder",
    "OpenCVQRDecoder",
    "SecurityFeatureScanner",
    "AuthenticityScorer",
    "DocumentAnalysisEngine",
    "get_analysis_engine",
    "analyze_legal",
    "analyze_security",
    "analyze_document",
]
