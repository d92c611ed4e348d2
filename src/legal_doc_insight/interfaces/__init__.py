"""Abstract interfaces for the Legal Document Insight system."""

from .analyzer import IDocumentAnalyzer
from .comparator import IDocumentComparator

__all__ = [
    "IDocumentAnalyzer",
    "IDocumentComparator",
]
