"""Data models and enums for the Legal Document Insight system."""

from .enums import ENTITY_CATEGORIES, AnalysisType, RiskLevel, SentimentLabel
from .analysis import (
    Analysis,
    Entities,
    Keyword,
    RiskAnalysis,
    RiskDetail,
    Sentiment,
    TermsAndCondition,
)
from .comparison import (
    AnalyzedDocument,
    Comparison,
    ComparisonSummary,
    Difference,
    DocumentReference,
    DocumentRiskLevel,
    EntityComparison,
    EntityCount,
    RiskComparison,
    RiskCount,
    RiskTrend,
    Similarity,
)

__all__ = [
    # Enums
    "ENTITY_CATEGORIES",
    "AnalysisType",
    "RiskLevel",
    "SentimentLabel",
    # Analysis models
    "Analysis",
    "Entities",
    "Keyword",
    "RiskAnalysis",
    "RiskDetail",
    "Sentiment",
    "TermsAndCondition",
    # Comparison models
    "AnalyzedDocument",
    "Comparison",
    "ComparisonSummary",
    "Difference",
    "DocumentReference",
    "DocumentRiskLevel",
    "EntityComparison",
    "EntityCount",
    "RiskComparison",
    "RiskCount",
    "RiskTrend",
    "Similarity",
]
