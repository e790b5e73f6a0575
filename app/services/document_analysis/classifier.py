"""
Text Classifier - guesses the kind of legal document from its OCR text.
"""

import logging
from typing import Optional

from .catalog import PatternCatalog
from .models import ClassificationResult

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"


class TextClassifier:
    """
    Keyword-coverage classifier.

    Confidence for a signature is the share of its keywords present in the
    text (case-insensitive substring). Signatures are scanned in catalog order
    and only a strictly higher confidence replaces the current best, so the
    first signature wins a tie.
    """

    def __init__(self, catalog: PatternCatalog):
        self.catalog = catalog

    def classify(self, text: Optional[str]) -> ClassificationResult:
        text_lower = (text or "").lower()
        best = ClassificationResult(type=UNKNOWN_TYPE, confidence=0.0, risk_level=None)

        for signature in self.catalog.document_types:
            if not signature.keywords:
                continue
            matches = sum(1 for kw in signature.keywords if kw.lower() in text_lower)
            confidence = matches / len(signature.keywords)
            if confidence > best.confidence:
                best = ClassificationResult(
                    type=signature.name,
                    confidence=confidence,
                    risk_level=signature.risk_level,
                )

        logger.debug("Classified document as %s (confidence %.2f)", best.type, best.confidence)
        return best
