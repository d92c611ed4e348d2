"""Document comparator interface for the Legal Document Insight system."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models.comparison import AnalyzedDocument, Comparison


class IDocumentComparator(ABC):
    """
    Abstract interface for multi-document comparison.

    Implementations compare already analyzed documents for similarity,
    differences, and shared risks and entities.
    """

    @abstractmethod
    def compare(self, documents: Sequence[AnalyzedDocument]) -> Comparison:
        """
        Compare two or more analyzed documents.

        Args:
            documents: Documents with their text and stored analysis.

        Returns:
            Comparison of the documents.

        Raises:
            ComparisonValidationError: If fewer than two documents are given.
        """
        pass
