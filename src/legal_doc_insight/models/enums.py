"""Enumerations for the Legal Document Insight system."""

from enum import Enum


class RiskLevel(Enum):
    """Risk levels used for keyword severities and overall document risk."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def score(self) -> int:
        """Numeric weight used when averaging risk across documents."""
        return _RISK_SCORES[self]


_RISK_SCORES = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}


class SentimentLabel(Enum):
    """Polarity label derived from the sign of a sentiment score."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class AnalysisType(Enum):
    """Sub-analyses that can be regenerated individually."""
    SUMMARY = "summary"
    RISK = "risk"
    ENTITIES = "entities"
    SIMPLIFIED = "simplified"
    KEYWORDS = "keywords"
    TERMS = "terms"
    SENTIMENT = "sentiment"
    DOCUMENT_TYPE = "document_type"


# Entity categories in their canonical order.
ENTITY_CATEGORIES = (
    "persons",
    "organizations",
    "dates",
    "money",
    "emails",
    "phones",
    "places",
)
