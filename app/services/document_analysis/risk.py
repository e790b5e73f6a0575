"""
Legal Risk Scorer - turns clause findings into a 0-10 score, warnings and a summary.
"""

from typing import Dict, List

from .models import ClassificationResult, ClauseFinding, LegalWarning, RiskLevel

RISK_POINTS: Dict[RiskLevel, int] = {
    RiskLevel.HIGH: 3,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 1,
}
MAX_RISK_SCORE = 10
HIGH_RISK_THRESHOLD = 7
MEDIUM_RISK_THRESHOLD = 4
MULTIPLE_HIGH_RISK_COUNT = 2  # warn when strictly more than this


def humanize(identifier: str) -> str:
    """'power_of_attorney' -> 'power of attorney'"""
    return identifier.replace("_", " ")


class LegalRiskScorer:
    def score(self, findings: List[ClauseFinding]) -> int:
        """Sum of per-clause points, saturating at MAX_RISK_SCORE."""
        total = sum(RISK_POINTS.get(f.risk_level, 0) for f in findings)
        return min(MAX_RISK_SCORE, total)

    def warnings(
        self,
        findings: List[ClauseFinding],
        classification: ClassificationResult,
    ) -> List[LegalWarning]:
        warnings: List[LegalWarning] = []

        if classification.risk_level == RiskLevel.HIGH:
            warnings.append(LegalWarning(
                type="document_risk",
                message=f"This is a {humanize(classification.type)} which requires careful review",
                severity=RiskLevel.HIGH,
            ))

        high_risk = [f for f in findings if f.risk_level == RiskLevel.HIGH]
        if len(high_risk) > MULTIPLE_HIGH_RISK_COUNT:
            warnings.append(LegalWarning(
                type="multiple_risks",
                message="This document contains multiple high-risk clauses",
                severity=RiskLevel.HIGH,
            ))

        if any(f.type == "penalty_clause" for f in findings):
            warnings.append(LegalWarning(
                type="penalty_warning",
                message="This document contains penalty clauses - you may face fines for violations",
                severity=RiskLevel.MEDIUM,
            ))

        return warnings

    def summary(
        self,
        classification: ClassificationResult,
        findings: List[ClauseFinding],
        risk_score: int,
    ) -> str:
        summary = f"This appears to be a {humanize(classification.type)}. "

        if findings:
            clause_names = ", ".join(humanize(f.type) for f in findings)
            summary += f"Found {len(findings)} important clauses including {clause_names}. "

        if risk_score >= HIGH_RISK_THRESHOLD:
            summary += "HIGH RISK: This document requires legal consultation before signing."
        elif risk_score >= MEDIUM_RISK_THRESHOLD:
            summary += "MEDIUM RISK: Review carefully and consider legal advice."
        else:
            summary += "LOW RISK: Standard document with typical clauses."

        return summary
