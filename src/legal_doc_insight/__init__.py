"""
Legal Document Insight

Heuristic analysis of legal documents (summary, entities, risks, plain-language
rewrite, keywords, terms and conditions, sentiment, document type) and
multi-document comparison.
"""

__version__ = "0.1.0"

# Export main components
from .models.enums import AnalysisType, RiskLevel, SentimentLabel
from .models.analysis import (
    Analysis,
    Entities,
    Keyword,
    RiskAnalysis,
    RiskDetail,
    Sentiment,
    TermsAndCondition,
)
from .models.comparison import AnalyzedDocument, Comparison
from .analyzers import AnalysisOutcome, DocumentAnalyzer
from .comparison import ComparisonEngine, ComparisonOutcome
from .interfaces import IDocumentAnalyzer, IDocumentComparator
from .serialization import AnalysisSerializer, ComparisonSerializer
from .stages import StageFailure
from .exceptions import (
    LegalAnalysisError,
    ComparisonValidationError,
    AnalysisPipelineError,
    ComparisonPipelineError,
    UnsupportedAnalysisTypeError,
)
from .config import (
    ConfigurationManager,
    ConfigurationType,
    VocabularyConfiguration,
    ConfigurationError,
    ValidationResult,
)
from .pipeline import (
    BatchItemResult,
    LegalAnalysisPipeline,
    PipelineConfig,
    PipelineResult,
    PipelineStats,
)

__all__ = [
    "AnalysisType",
    "RiskLevel",
    "SentimentLabel",
    "Analysis",
    "Entities",
    "Keyword",
    "RiskAnalysis",
    "RiskDetail",
    "Sentiment",
    "TermsAndCondition",
    "AnalyzedDocument",
    "Comparison",
    "AnalysisOutcome",
    "DocumentAnalyzer",
    "ComparisonEngine",
    "ComparisonOutcome",
    "IDocumentAnalyzer",
    "IDocumentComparator",
    "AnalysisSerializer",
    "ComparisonSerializer",
    "StageFailure",
    "LegalAnalysisError",
    "ComparisonValidationError",
    "AnalysisPipelineError",
    "ComparisonPipelineError",
    "UnsupportedAnalysisTypeError",
    "ConfigurationManager",
    "ConfigurationType",
    "VocabularyConfiguration",
    "ConfigurationError",
    "ValidationResult",
    "BatchItemResult",
    "LegalAnalysisPipeline",
    "PipelineConfig",
    "PipelineResult",
    "PipelineStats",
]
