"""Keyword-based risk analysis."""

from typing import Dict, List, Optional

from ..config.defaults import default_risk_keywords
from ..config.models import RiskKeyword
from ..models.analysis import RiskAnalysis, RiskDetail
from ..models.enums import RiskLevel
from .text_utils import split_sentences


class RiskAnalyzer:
    """
    Finds risk keywords sentence by sentence.

    A keyword is recorded once per sentence it occurs in, as a
    case-insensitive substring. Hits are grouped by keyword in the
    order the keywords were first hit.
    """

    def __init__(self, risk_keywords: Optional[List[RiskKeyword]] = None):
        self._keywords = risk_keywords if risk_keywords is not None else default_risk_keywords()

    def analyze(self, text: str) -> RiskAnalysis:
        """Build the risk profile of a document."""
        details: Dict[str, List[RiskDetail]] = {}
        total = 0

        for position, sentence in enumerate(split_sentences(text)):
            for entry in self._keywords:
                if entry.matches(sentence):
                    details.setdefault(entry.keyword, []).append(
                        RiskDetail(
                            keyword=entry.keyword,
                            sentence=sentence.strip(),
                            position=position,
                            severity=entry.severity,
                        )
                    )
                    total += 1

        hits = [detail for group in details.values() for detail in group]
        return RiskAnalysis(
            total_risks=total,
            risk_keywords=list(details),
            risk_details=details,
            risk_level=overall_risk_level(hits),
        )


def overall_risk_level(hits: List[RiskDetail]) -> RiskLevel:
    """
    Derive a document's risk level from its hits.

    HIGH with more than 3 high-severity hits, or more than 1 high and more
    than 5 medium. MEDIUM with any high hit or more than 3 medium.
    """
    high = sum(1 for hit in hits if hit.severity == RiskLevel.HIGH)
    medium = sum(1 for hit in hits if hit.severity == RiskLevel.MEDIUM)

    if high > 3 or (high > 1 and medium > 5):
        return RiskLevel.HIGH
    if high > 0 or medium > 3:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW
