"""
Authenticity Scorer
===================

Fuses the QR finding and the textual security features into a 0-100 trust
score, then derives flags and recommendations from independent checks.
Several flags can fire for the same cause: an invalid QR whose content also
disagrees with the page gets both the "invalid" warning and the "mismatch"
error.
"""

from typing import List

from .models import FlagKind, QRFinding, RiskLevel, SecurityFeatures, SecurityFlag
from .qr import round_half_up

BASE_SCORE = 50
QR_FOUND_BONUS = 15
QR_VALID_BONUS = 15
QR_TEXT_MATCH_WEIGHT = 0.2
NO_QR_PENALTY = 10
OFFICIAL_SEAL_POINTS = 8
SECURITY_MARK_POINTS = 5
FORMAT_INDICATOR_POINTS = 3
SUSPICIOUS_TERM_PENALTY = 30

MIN_SCORE = 0
MAX_SCORE = 100
FRAUD_THRESHOLD = 30
CAUTION_THRESHOLD = 60
VERIFY_THRESHOLD = 70


class AuthenticityScorer:
    def score(self, qr: QRFinding, features: SecurityFeatures) -> int:
        score: float = BASE_SCORE

        if qr.found:
            score += QR_FOUND_BONUS
            if qr.is_valid:
                score += QR_VALID_BONUS
            if qr.text_match.matched:
                score += qr.text_match.score * QR_TEXT_MATCH_WEIGHT
        else:
            score -= NO_QR_PENALTY

        score += len(features.official_seals) * OFFICIAL_SEAL_POINTS
        score += len(features.security_marks) * SECURITY_MARK_POINTS
        score += len(features.format_indicators) * FORMAT_INDICATOR_POINTS
        score -= len(features.suspicious_content) * SUSPICIOUS_TERM_PENALTY

        return max(MIN_SCORE, min(MAX_SCORE, round_half_up(score)))

    def flags(self, qr: QRFinding, features: SecurityFeatures, score: int) -> List[SecurityFlag]:
        flags: List[SecurityFlag] = []

        if not qr.found:
            flags.append(SecurityFlag(
                type=FlagKind.WARNING,
                message="No QR codes detected - verify document manually",
                severity=RiskLevel.MEDIUM,
            ))

        if qr.found and not qr.is_valid:
            flags.append(SecurityFlag(
                type=FlagKind.WARNING,
                message="QR code found but does not contain expected government patterns",
                severity=RiskLevel.MEDIUM,
            ))

        if qr.found and not qr.text_match.matched:
            flags.append(SecurityFlag(
                type=FlagKind.ERROR,
                message="QR code content does not match document text",
                severity=RiskLevel.HIGH,
            ))

        if features.suspicious_content:
            flags.append(SecurityFlag(
                type=FlagKind.ERROR,
                message=f"Suspicious content detected: {', '.join(features.suspicious_content)}",
                severity=RiskLevel.HIGH,
            ))

        if score < FRAUD_THRESHOLD:
            flags.append(SecurityFlag(
                type=FlagKind.ERROR,
                message="Very low authenticity score - document may be fraudulent",
                severity=RiskLevel.HIGH,
            ))
        elif score < CAUTION_THRESHOLD:
            flags.append(SecurityFlag(
                type=FlagKind.WARNING,
                message="Low authenticity score - verify document carefully",
                severity=RiskLevel.MEDIUM,
            ))

        if not features.official_seals:
            flags.append(SecurityFlag(
                type=FlagKind.INFO,
                message="No official seals detected in document text",
                severity=RiskLevel.LOW,
            ))

        return flags

    def recommendations(self, qr: QRFinding, features: SecurityFeatures, score: int) -> List[str]:
        recommendations: List[str] = []

        if score < VERIFY_THRESHOLD:
            recommendations.append("Verify document with issuing authority")
            recommendations.append("Cross-check document details manually")

        if not qr.found:
            recommendations.append("Look for physical security features like watermarks")
            recommendations.append("Check for embossed seals or stamps")

        if not features.official_seals:
            recommendations.append("Verify presence of official stamps or seals")

        if features.suspicious_content:
            recommendations.append("Document contains suspicious markers - seek legal verification")

        recommendations.append("Keep document hash for future verification")
        recommendations.append("Store original document securely")
        return recommendations
