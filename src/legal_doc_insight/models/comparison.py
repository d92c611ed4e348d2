"""Multi-document comparison models for the Legal Document Insight system."""

from dataclasses import dataclass, field
from typing import Dict, List

from .analysis import Analysis
from .enums import RiskLevel


@dataclass
class AnalyzedDocument:
    """
    A document ready for comparison.

    Pairs the raw text with the analysis already computed for it.
    """
    id: str
    name: str
    text: str
    analysis: Analysis


@dataclass
class DocumentReference:
    """Identifying information of a compared document."""
    id: str
    name: str
    type: str


@dataclass
class EntityCount:
    """An entity and the number of documents it appears in."""
    entity: str
    count: int


@dataclass
class RiskCount:
    """A risk keyword and the number of documents it appears in."""
    risk: str
    count: int


@dataclass
class Similarity:
    """Similarity of one unordered document pair."""
    doc1: str
    doc2: str
    similarity_score: float
    common_keywords: List[str] = field(default_factory=list)
    common_entities: Dict[str, List[EntityCount]] = field(default_factory=dict)


@dataclass
class Difference:
    """Differences of one unordered document pair."""
    doc1: str
    doc2: str
    unique_keywords1: List[str] = field(default_factory=list)
    unique_keywords2: List[str] = field(default_factory=list)
    unique_entities1: Dict[str, List[str]] = field(default_factory=dict)
    unique_entities2: Dict[str, List[str]] = field(default_factory=dict)
    structural_differences: List[str] = field(default_factory=list)


@dataclass
class DocumentRiskLevel:
    """Risk level passthrough for one document."""
    name: str
    risk_level: RiskLevel
    total_risks: int


@dataclass
class RiskTrend:
    """Share of documents at one risk level."""
    risk_level: RiskLevel
    count: int
    percentage: float


@dataclass
class RiskComparison:
    """Risk profile across the compared documents."""
    overall_risk_levels: List[DocumentRiskLevel] = field(default_factory=list)
    common_risks: List[RiskCount] = field(default_factory=list)
    unique_risks: Dict[str, List[str]] = field(default_factory=dict)
    risk_trends: List[RiskTrend] = field(default_factory=list)


@dataclass
class EntityComparison:
    """Entity overlap across the compared documents."""
    common_entities: Dict[str, List[EntityCount]] = field(default_factory=dict)
    unique_entities: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    entity_frequency: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass
class ComparisonSummary:
    """Headline figures and insights of a comparison."""
    total_documents: int
    average_risk_level: RiskLevel = RiskLevel.MEDIUM
    most_common_risks: List[RiskCount] = field(default_factory=list)
    document_types: Dict[str, int] = field(default_factory=dict)
    key_insights: List[str] = field(default_factory=list)


@dataclass
class Comparison:
    """Result of comparing two or more analyzed documents."""
    documents: List[DocumentReference]
    similarities: List[Similarity]
    differences: List[Difference]
    risk_comparison: RiskComparison
    entity_comparison: EntityComparison
    summary: ComparisonSummary
