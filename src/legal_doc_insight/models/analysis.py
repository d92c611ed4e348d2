"""Single-document analysis models for the Legal Document Insight system."""

from dataclasses import dataclass, field
from typing import Dict, List

from .enums import ENTITY_CATEGORIES, RiskLevel, SentimentLabel


@dataclass
class Entities:
    """
    Named entities found in a document, grouped by category.

    Each list is deduplicated (case-sensitive, first occurrence wins)
    and holds no blank strings.
    """
    persons: List[str] = field(default_factory=list)
    organizations: List[str] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    money: List[str] = field(default_factory=list)
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    places: List[str] = field(default_factory=list)

    def __post_init__(self):
        for category in ENTITY_CATEGORIES:
            setattr(self, category, clean_entity_values(getattr(self, category) or []))

    def get(self, category: str) -> List[str]:
        """Get the entity list for a category name."""
        if category not in ENTITY_CATEGORIES:
            raise KeyError(f"Unknown entity category: {category}")
        return getattr(self, category)

    def as_dict(self) -> Dict[str, List[str]]:
        """Return the categories as an ordered mapping."""
        return {category: list(getattr(self, category)) for category in ENTITY_CATEGORIES}

    def total(self) -> int:
        """Total number of entities across all categories."""
        return sum(len(getattr(self, category)) for category in ENTITY_CATEGORIES)


def clean_entity_values(values: List[str]) -> List[str]:
    """Drop blank values and duplicates while keeping first-seen order."""
    seen = set()
    cleaned: List[str] = []
    for value in values:
        if not value or not value.strip():
            continue
        if value in seen:
            continue
        seen.add(value)
        cleaned.append(value)
    return cleaned


@dataclass
class RiskDetail:
    """A single risk keyword hit inside a sentence."""
    keyword: str
    sentence: str
    position: int  # 0-based index among non-blank sentences
    severity: RiskLevel


@dataclass
class RiskAnalysis:
    """
    Risk profile of a document.

    ``risk_details`` groups hits by keyword in first-hit order;
    ``risk_keywords`` mirrors its keys and ``total_risks`` counts every hit.
    """
    total_risks: int = 0
    risk_keywords: List[str] = field(default_factory=list)
    risk_details: Dict[str, List[RiskDetail]] = field(default_factory=dict)
    risk_level: RiskLevel = RiskLevel.LOW

    def hits(self) -> List[RiskDetail]:
        """Flatten all risk hits."""
        return [detail for details in self.risk_details.values() for detail in details]

    def count_by_severity(self, severity: RiskLevel) -> int:
        """Count hits with the given severity."""
        return sum(1 for detail in self.hits() if detail.severity == severity)


@dataclass
class Keyword:
    """A salient word with its per-document score."""
    word: str
    score: float


@dataclass
class TermsAndCondition:
    """A sentence flagged as a contractual term."""
    sentence: str
    position: int
    type: str


@dataclass
class Sentiment:
    """Lexicon-based sentiment of a document."""
    score: float = 0.0
    label: SentimentLabel = SentimentLabel.NEUTRAL
    magnitude: float = 0.0


@dataclass(frozen=True)
class Analysis:
    """
    Complete analysis of one document's text.

    Produced once per text and never mutated; regenerating a part of it
    yields a new record.
    """
    summary: str
    entities: Entities
    risks: RiskAnalysis
    simplified: str
    keywords: List[Keyword]
    terms_and_conditions: List[TermsAndCondition]
    sentiment: Sentiment
    document_type: str
