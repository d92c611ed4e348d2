"""Single-document analysis components for the Legal Document Insight system."""

from .document_analyzer import AnalysisOutcome, DocumentAnalyzer, resolve_analysis_type
from .summarizer import Summarizer
from .entity_extractor import EntityExtractor
from .risk_analyzer import RiskAnalyzer, overall_risk_level
from .simplifier import TextSimplifier
from .keyword_extractor import KeywordExtractor
from .terms_extractor import TermsExtractor
from .sentiment import SentimentAnalyzer
from .classifier import DocumentClassifier

__all__ = [
    "DocumentAnalyzer",
    "AnalysisOutcome",
    "resolve_analysis_type",
    "Summarizer",
    "EntityExtractor",
    "RiskAnalyzer",
    "overall_risk_level",
    "TextSimplifier",
    "KeywordExtractor",
    "TermsExtractor",
    "SentimentAnalyzer",
    "DocumentClassifier",
]
