"""Document analyzer interface for the Legal Document Insight system."""

from abc import ABC, abstractmethod

from ..models.analysis import Analysis


class IDocumentAnalyzer(ABC):
    """
    Abstract interface for single-document analysis.

    Implementations turn the extracted text of one legal document into
    an Analysis: summary, entities, risks, simplified text, keywords,
    terms and conditions, sentiment and document type.
    """

    @abstractmethod
    def analyze(self, text: str) -> Analysis:
        """
        Analyze a document's text.

        Args:
            text: Extracted document text. May be empty.

        Returns:
            Analysis of the text. Failed sub-analyses hold their defaults.
        """
        pass

    @abstractmethod
    def serialize(self, analysis: Analysis) -> str:
        """
        Serialize an Analysis to JSON string.

        Args:
            analysis: The analysis to serialize.

        Returns:
            JSON string representation of the analysis.
        """
        pass

    @abstractmethod
    def deserialize(self, json_str: str) -> Analysis:
        """
        Deserialize a JSON string to an Analysis.

        Args:
            json_str: JSON string to deserialize.

        Returns:
            Analysis reconstructed from the JSON.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        pass
