"""
Pattern Catalog
===============

Static knowledge base shared by every analysis component:
- document-type signatures (keyword sets + inherent risk)
- dangerous-clause signatures (trigger phrases, plain-language explanation,
  statutory citation)
- security vocabularies for QR validation and text scanning

The catalog is built once and handed to each component by reference. All
collections are tuples so iteration order is the declaration order, which is
what classification tie-breaks and clause emission order rely on.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from .models import RiskLevel


# =============================================================================
# SIGNATURES
# =============================================================================

@dataclass(frozen=True)
class DocumentTypeSignature:
    """Keywords that identify a kind of legal document."""
    name: str
    keywords: Tuple[str, ...]
    risk_level: RiskLevel

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.name, "keywords": list(self.keywords), "riskLevel": self.risk_level.value}


@dataclass(frozen=True)
class ClauseSignature:
    """Trigger phrases for a category of clause a signer should look at twice."""
    clause_type: str
    patterns: Tuple[str, ...]
    explanation: str
    risk_level: RiskLevel
    legal_reference: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.clause_type,
            "patterns": list(self.patterns),
            "explanation": self.explanation,
            "riskLevel": self.risk_level.value,
            "legalReference": self.legal_reference,
        }


@dataclass(frozen=True)
class SecurityVocabulary:
    """Phrase lists used by the QR validator and the security feature scanner."""
    qr_indicators: Tuple[str, ...]
    official_seals: Tuple[str, ...]
    security_marks: Tuple[str, ...]
    suspicious_terms: Tuple[str, ...]
    format_indicators: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "qrIndicators": list(self.qr_indicators),
            "officialSeals": list(self.official_seals),
            "securityMarks": list(self.security_marks),
            "suspiciousTerms": list(self.suspicious_terms),
            "formatIndicators": list(self.format_indicators),
        }


@dataclass(frozen=True)
class PatternCatalog:
    document_types: Tuple[DocumentTypeSignature, ...]
    clauses: Tuple[ClauseSignature, ...]
    security: SecurityVocabulary
    default_legal_reference: str = "General Contract Law"

    def reference_for(self, clause: ClauseSignature) -> str:
        return clause.legal_reference or self.default_legal_reference

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentTypes": [d.to_dict() for d in self.document_types],
            "clauses": [c.to_dict() for c in self.clauses],
            "security": self.security.to_dict(),
            "defaultLegalReference": self.default_legal_reference,
        }


# =============================================================================
# DEFAULT CATALOG
# =============================================================================

_DOCUMENT_TYPES = (
    DocumentTypeSignature(
        name="property_deed",
        keywords=("conveyance", "sale deed", "property", "plot", "land", "immovable",
                  "registration", "sub-registrar"),
        risk_level=RiskLevel.HIGH,
    ),
    DocumentTypeSignature(
        name="loan_agreement",
        keywords=("loan", "borrower", "lender", "interest", "emi", "principal", "default",
                  "collateral"),
        risk_level=RiskLevel.HIGH,
    ),
    DocumentTypeSignature(
        name="rental_agreement",
        keywords=("rent", "tenant", "landlord", "lease", "deposit", "premises", "occupation"),
        risk_level=RiskLevel.MEDIUM,
    ),
    DocumentTypeSignature(
        name="employment_contract",
        keywords=("employee", "employer", "salary", "designation", "termination", "probation"),
        risk_level=RiskLevel.MEDIUM,
    ),
    DocumentTypeSignature(
        name="insurance_policy",
        keywords=("policy", "premium", "coverage", "claim", "beneficiary", "insured"),
        risk_level=RiskLevel.MEDIUM,
    ),
    DocumentTypeSignature(
        name="power_of_attorney",
        keywords=("power of attorney", "attorney", "authorize", "behalf", "execute"),
        risk_level=RiskLevel.HIGH,
    ),
)

_CLAUSES = (
    ClauseSignature(
        clause_type="penalty_clause",
        patterns=("penalty", "fine", "liquidated damages", "forfeiture"),
        explanation="This clause means you may have to pay additional money as punishment "
                    "if you break the agreement",
        risk_level=RiskLevel.HIGH,
        legal_reference="Indian Contract Act, 1872 - Section 74",
    ),
    ClauseSignature(
        clause_type="liability_clause",
        patterns=("liable", "responsible", "damages", "indemnify", "hold harmless"),
        explanation="This clause makes you responsible for covering costs or damages that may occur",
        risk_level=RiskLevel.HIGH,
        legal_reference="Indian Contract Act, 1872 - Section 124",
    ),
    ClauseSignature(
        clause_type="termination_clause",
        patterns=("terminate", "cancel", "breach", "default", "violation"),
        explanation="This clause explains when and how the agreement can be ended",
        risk_level=RiskLevel.MEDIUM,
    ),
    ClauseSignature(
        clause_type="payment_clause",
        patterns=("payment", "due", "interest", "late fee", "overdue"),
        explanation="This clause specifies payment terms and what happens if you pay late",
        risk_level=RiskLevel.MEDIUM,
        legal_reference="Indian Contract Act, 1872 - Section 61",
    ),
    ClauseSignature(
        clause_type="ownership_transfer",
        patterns=("transfer", "convey", "assign", "ownership", "title"),
        explanation="This clause transfers ownership rights from one party to another",
        risk_level=RiskLevel.HIGH,
        legal_reference="Transfer of Property Act, 1882 - Section 54",
    ),
)

_SECURITY = SecurityVocabulary(
    qr_indicators=("government.in", "nic.in", "gov.in", "uidai.gov.in", "registration",
                   "certificate"),
    official_seals=("government of india", "registrar", "sub-registrar", "collector",
                    "tehsildar", "revenue", "court", "notary", "commissioner",
                    "district magistrate"),
    security_marks=("watermark", "security", "authenticated", "verified", "original", "seal",
                    "stamp", "embossed"),
    suspicious_terms=("fake", "duplicate", "copy", "specimen", "draft", "template", "sample"),
    format_indicators=("doc no", "document number", "serial number", "reference number",
                       "file number", "registration number"),
)


def build_default_catalog() -> PatternCatalog:
    """Build the catalog of Indian legal document patterns."""
    return PatternCatalog(document_types=_DOCUMENT_TYPES, clauses=_CLAUSES, security=_SECURITY)


@lru_cache(maxsize=1)
def get_pattern_catalog() -> PatternCatalog:
    """Process-wide default catalog (built on first use, read-only afterwards)."""
    return build_default_catalog()
