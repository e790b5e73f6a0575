"""
Security Feature Scanner - looks for seals, security marks, suspicious words
and document-number formats in the OCR text.
"""

from typing import Iterable, List, Optional

from .catalog import PatternCatalog
from .models import SecurityFeatures


def find_phrases(text_lower: str, vocabulary: Iterable[str]) -> List[str]:
    """Vocabulary entries contained in the text, in vocabulary order."""
    return [phrase for phrase in vocabulary if phrase.lower() in text_lower]


class SecurityFeatureScanner:
    def __init__(self, catalog: PatternCatalog):
        self.vocabulary = catalog.security

    def scan(self, text: Optional[str]) -> SecurityFeatures:
        text_lower = (text or "").lower()
        return SecurityFeatures(
            official_seals=find_phrases(text_lower, self.vocabulary.official_seals),
            security_marks=find_phrases(text_lower, self.vocabulary.security_marks),
            suspicious_content=find_phrases(text_lower, self.vocabulary.suspicious_terms),
            format_indicators=find_phrases(text_lower, self.vocabulary.format_indicators),
        )
