"""
Document Analysis Engine
========================

Entry points used by the API layer:

- analyze_legal(text)                 -> LegalAnalysisResult (never raises)
- analyze_security(document, text)    -> SecurityAnalysisResult
- analyze_document(document, text)    -> DocumentAnalysisResult (both)

Legal pipeline:    classify -> extract clauses -> score / warn / summarise
Security pipeline: fingerprint | QR | feature scan  (parallel)  -> authenticity

The only failure that escapes is DocumentReadError, raised before any work is
scheduled, so a caller gets either a complete result or that single error.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .authenticity import AuthenticityScorer
from .catalog import PatternCatalog, get_pattern_catalog
from .classifier import TextClassifier
from .clauses import ClauseExtractor
from .features import SecurityFeatureScanner
from .fingerprint import DocumentSource, generate_document_hash, read_document_bytes
from .models import DocumentAnalysisResult, LegalAnalysisResult, SecurityAnalysisResult
from .qr import QRCodeAnalyzer, QRDecoder
from .risk import LegalRiskScorer

logger = logging.getLogger(__name__)


class DocumentAnalysisEngine:
    """
    Stateless orchestrator over the analysis components.

    Holds only the immutable catalog and the components built from it, so one
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        catalog: Optional[PatternCatalog] = None,
        qr_decoder: Optional[QRDecoder] = None,
        max_workers: int = 3,
    ):
        self.catalog = catalog or get_pattern_catalog()
        self.max_workers = max(1, max_workers)

        self.classifier = TextClassifier(self.catalog)
        self.clause_extractor = ClauseExtractor(self.catalog)
        self.risk_scorer = LegalRiskScorer()

        self.qr_analyzer = QRCodeAnalyzer(self.catalog, decoder=qr_decoder)
        self.feature_scanner = SecurityFeatureScanner(self.catalog)
        self.authenticity_scorer = AuthenticityScorer()

    # =========================================================================
    # LEGAL
    # =========================================================================

    def analyze_legal(self, text: Optional[str]) -> LegalAnalysisResult:
        text = text or ""
        classification = self.classifier.classify(text)
        clauses = self.clause_extractor.extract(text)
        risk_score = self.risk_scorer.score(clauses)

        result = LegalAnalysisResult(
            document_type=classification,
            clauses=clauses,
            risk_score=risk_score,
            warnings=self.risk_scorer.warnings(clauses, classification),
            summary=self.risk_scorer.summary(classification, clauses, risk_score),
        )
        logger.info(
            "Legal analysis: type=%s clauses=%d risk=%d",
            classification.type, len(clauses), risk_score,
        )
        return result

    # =========================================================================
    # SECURITY
    # =========================================================================

    def analyze_security(
        self,
        document: DocumentSource,
        extracted_text: Optional[str],
    ) -> SecurityAnalysisResult:
        """
        Raises:
            DocumentReadError: the document bytes could not be read
        """
        data = read_document_bytes(document)
        return self._analyze_security_bytes(data, extracted_text or "")

    def _analyze_security_bytes(self, data: bytes, extracted_text: str) -> SecurityAnalysisResult:
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="security") as pool:
            hash_future = pool.submit(generate_document_hash, data)
            qr_future = pool.submit(self.qr_analyzer.analyze, data, extracted_text)
            features_future = pool.submit(self.feature_scanner.scan, extracted_text)

            document_hash = hash_future.result()
            qr_analysis = qr_future.result()
            features = features_future.result()

        score = self.authenticity_scorer.score(qr_analysis, features)
        result = SecurityAnalysisResult(
            document_hash=document_hash,
            qr_analysis=qr_analysis,
            security_features=features,
            authenticity_score=score,
            flags=self.authenticity_scorer.flags(qr_analysis, features, score),
            recommendations=self.authenticity_scorer.recommendations(qr_analysis, features, score),
        )
        logger.info(
            "Security analysis: %d bytes, qr=%s, authenticity=%d, flags=%d",
            document_hash.file_size, qr_analysis.type.value, score, len(result.flags),
        )
        return result

    # =========================================================================
    # COMBINED
    # =========================================================================

    def analyze_document(
        self,
        document: DocumentSource,
        extracted_text: Optional[str],
    ) -> DocumentAnalysisResult:
        """Run both pipelines concurrently on the same inputs."""
        data = read_document_bytes(document)
        text = extracted_text or ""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="pipeline") as pool:
            legal_future = pool.submit(self.analyze_legal, text)
            security_future = pool.submit(self._analyze_security_bytes, data, text)
            return DocumentAnalysisResult(
                legal=legal_future.result(),
                security=security_future.result(),
            )


# =============================================================================
# SINGLETON & INTEGRATION
# =============================================================================

_analysis_engine: Optional[DocumentAnalysisEngine] = None


def get_analysis_engine() -> DocumentAnalysisEngine:
    """Get or create the analysis engine singleton."""
    global _analysis_engine
    if _analysis_engine is None:
        from app.core.config import get_settings
        _analysis_engine = DocumentAnalysisEngine(max_workers=get_settings().analysis_workers)
    return _analysis_engine


def analyze_legal(text: Optional[str]) -> LegalAnalysisResult:
    """Legal-risk assessment of OCR text."""
    return get_analysis_engine().analyze_legal(text)


def analyze_security(document: DocumentSource, extracted_text: Optional[str]) -> SecurityAnalysisResult:
    """
    Authenticity assessment of a scanned document.

    Args:
        document: Raw upload bytes, a path, or a binary stream
        extracted_text: OCR text of the same document

    Returns:
        SecurityAnalysisResult with fingerprint, QR finding, features and score
    """
    return get_analysis_engine().analyze_security(document, extracted_text)


def analyze_document(document: DocumentSource, extracted_text: Optional[str]) -> DocumentAnalysisResult:
    return get_analysis_engine().analyze_document(document, extracted_text)
