"""Multi-document comparison for the Legal Document Insight system."""

from .comparison_engine import ComparisonEngine, ComparisonOutcome

__all__ = ["ComparisonEngine", "ComparisonOutcome"]
