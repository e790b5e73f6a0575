"""
Clause Extractor
================

Finds sentences that trigger a dangerous-clause signature and reports each hit
with one sentence of context on either side.

Ranking is by match strength (share of the signature's trigger phrases found in
the sentence). Python's sort is stable, so equal strengths keep emission order:
signature declaration order first, then sentence order within a signature.
"""

import logging
import re
from typing import List, Optional

from .catalog import PatternCatalog
from .models import ClauseFinding

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
MIN_SENTENCE_LENGTH = 20  # Shorter candidates are headers, numbering, fragments
CONTEXT_RADIUS = 1
MAX_FINDINGS = 5


def split_sentences(text: Optional[str]) -> List[str]:
    """Split on sentence punctuation, trim, and drop fragments shorter than MIN_SENTENCE_LENGTH."""
    if not text:
        return []
    candidates = (s.strip() for s in SENTENCE_BOUNDARY.split(text))
    return [s for s in candidates if len(s) >= MIN_SENTENCE_LENGTH]


def sentence_context(sentences: List[str], index: int, radius: int = CONTEXT_RADIUS) -> str:
    """Join sentence ``index`` with its neighbours (clipped to the list) by '. '."""
    start = max(0, index - radius)
    end = min(len(sentences), index + radius + 1)
    return ". ".join(sentences[start:end]).strip()


class ClauseExtractor:
    def __init__(self, catalog: PatternCatalog, max_findings: int = MAX_FINDINGS):
        self.catalog = catalog
        self.max_findings = max_findings

    def extract(self, text: Optional[str]) -> List[ClauseFinding]:
        """Return at most ``max_findings`` clause hits, strongest first."""
        sentences = split_sentences(text)
        lowered = [s.lower() for s in sentences]
        findings: List[ClauseFinding] = []

        for clause in self.catalog.clauses:
            if not clause.patterns:
                continue
            patterns = [p.lower() for p in clause.patterns]
            for i, sentence in enumerate(lowered):
                match_count = sum(1 for p in patterns if p in sentence)
                if match_count == 0:
                    continue
                findings.append(ClauseFinding(
                    id=f"clause_{len(findings) + 1}",
                    type=clause.clause_type,
                    text=sentence_context(sentences, i),
                    explanation=clause.explanation,
                    risk_level=clause.risk_level,
                    legal_reference=self.catalog.reference_for(clause),
                    match_strength=match_count / len(patterns),
                ))

        logger.debug("Clause scan: %d sentences, %d raw hits", len(sentences), len(findings))
        findings.sort(key=lambda f: f.match_strength, reverse=True)
        return findings[:self.max_findings]
