"""
Document Analysis - Result Models
=================================

Value types produced by the legal and security pipelines. Every result is
built fresh per call and serialises to the JSON shape consumed by the UI
through ``to_dict()``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# =============================================================================
# ENUMS
# =============================================================================

class RiskLevel(str, Enum):
    """Risk / severity grade shared by signatures, warnings and flags."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FlagKind(str, Enum):
    """Kind of security flag shown to the user."""
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class QRType(str, Enum):
    """What an embedded QR payload appears to verify."""
    AADHAAR = "Aadhaar Verification"
    REGISTRATION = "Registration Document"
    CERTIFICATE = "Certificate Verification"
    URL = "URL Verification"
    GENERAL = "General Data"
    NONE = "none"
    ERROR = "error"


# =============================================================================
# LEGAL PIPELINE RESULTS
# =============================================================================

@dataclass
class ClassificationResult:
    """Best-matching document type for a text."""
    type: str
    confidence: float  # 0.0 to 1.0
    risk_level: Optional[RiskLevel] = None

    @property
    def is_unknown(self) -> bool:
        return self.risk_level is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "confidence": self.confidence,
            "riskLevel": self.risk_level.value if self.risk_level else None,
        }


@dataclass
class ClauseFinding:
    """A dangerous clause located in the text, with one sentence of context each side."""
    id: str
    type: str
    text: str
    explanation: str
    risk_level: RiskLevel
    legal_reference: str
    match_strength: float  # 0.0 to 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "text": self.text,
            "explanation": self.explanation,
            "riskLevel": self.risk_level.value,
            "legalReference": self.legal_reference,
            "matchStrength": self.match_strength,
        }


@dataclass
class LegalWarning:
    type: str  # document_risk, multiple_risks, penalty_warning
    message: str
    severity: RiskLevel

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "severity": self.severity.value}


@dataclass
class LegalAnalysisResult:
    """Complete legal-risk assessment of one document."""
    document_type: ClassificationResult
    clauses: List[ClauseFinding] = field(default_factory=list)
    risk_score: int = 0  # 0 to 10
    warnings: List[LegalWarning] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentType": self.document_type.to_dict(),
            "clauses": [c.to_dict() for c in self.clauses],
            "riskScore": self.risk_score,
            "warnings": [w.to_dict() for w in self.warnings],
            "summary": self.summary,
        }


# =============================================================================
# SECURITY PIPELINE RESULTS
# =============================================================================

@dataclass
class DocumentHash:
    """Cryptographic fingerprint of the raw uploaded bytes."""
    algorithm: str
    hash: str  # hex digest
    timestamp: str  # ISO 8601 UTC
    file_size: int  # bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "hash": self.hash,
            "timestamp": self.timestamp,
            "fileSize": self.file_size,
        }


@dataclass
class TextMatch:
    """How much of a QR payload is corroborated by the OCR text."""
    matched: bool = False
    score: int = 0  # 0 to 100
    matched_words: int = 0
    total_words: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": self.matched,
            "score": self.score,
            "matchedWords": self.matched_words,
            "totalWords": self.total_words,
        }


@dataclass
class QRFinding:
    """Outcome of QR detection. ``found=False`` is a normal result, not a failure."""
    found: bool
    data: Optional[str] = None
    is_valid: bool = False
    type: QRType = QRType.NONE
    text_match: TextMatch = field(default_factory=TextMatch)
    error: Optional[str] = None

    @classmethod
    def not_found(cls) -> "QRFinding":
        return cls(found=False, type=QRType.NONE)

    @classmethod
    def failed(cls, message: str) -> "QRFinding":
        return cls(found=False, type=QRType.ERROR, error=message)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "found": self.found,
            "data": self.data,
            "isValid": self.is_valid,
            "type": self.type.value,
            "textMatch": self.text_match.to_dict(),
        }
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass
class SecurityFeatures:
    """Vocabulary entries found in the text, each list in vocabulary order."""
    official_seals: List[str] = field(default_factory=list)
    security_marks: List[str] = field(default_factory=list)
    suspicious_content: List[str] = field(default_factory=list)
    format_indicators: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "officialSeals": list(self.official_seals),
            "securityMarks": list(self.security_marks),
            "suspiciousContent": list(self.suspicious_content),
            "formatIndicators": list(self.format_indicators),
        }


@dataclass
class SecurityFlag:
    type: FlagKind
    message: str
    severity: RiskLevel

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "message": self.message, "severity": self.severity.value}


@dataclass
class SecurityAnalysisResult:
    """Complete authenticity assessment of one document."""
    document_hash: DocumentHash
    qr_analysis: QRFinding
    security_features: SecurityFeatures
    authenticity_score: int = 0  # 0 to 100
    flags: List[SecurityFlag] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentHash": self.document_hash.to_dict(),
            "qrAnalysis": self.qr_analysis.to_dict(),
            "securityFeatures": self.security_features.to_dict(),
            "authenticityScore": self.authenticity_score,
            "flags": [f.to_dict() for f in self.flags],
            "recommendations": list(self.recommendations),
        }


@dataclass
class DocumentAnalysisResult:
    """Both assessments of the same document."""
    legal: LegalAnalysisResult
    security: SecurityAnalysisResult

    def to_dict(self) -> Dict[str, Any]:
        return {"legal": self.legal.to_dict(), "security": self.security.to_dict()}
