"""Custom exceptions for document analysis and comparison."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class LegalAnalysisError(Exception):
    """
    Base exception for analysis and comparison errors.

    Attributes:
        message: Human-readable error description.
        stage: Name of the stage or operation that failed, if known.
        details: Additional error details.
    """
    message: str
    stage: Optional[str] = None
    details: Optional[dict] = field(default_factory=dict)

    def __post_init__(self):
        if self.details is None:
            self.details = {}
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.stage:
            return f"{self.message} | Stage: {self.stage}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "stage": self.stage,
            "details": self.details,
        }


@dataclass
class ComparisonValidationError(LegalAnalysisError):
    """
    Raised when a comparison is requested with too few documents.

    The comparison is not attempted; the caller must supply at least
    ``details["minimum"]`` documents.
    """

    @property
    def document_count(self) -> int:
        """Number of documents that were supplied."""
        return self.details.get("document_count", 0)


@dataclass
class AnalysisPipelineError(LegalAnalysisError):
    """
    Raised when a single-document analysis cannot produce any result.

    Stage failures never raise this; it signals invalid input or a defect
    in the analysis call itself.
    """


@dataclass
class ComparisonPipelineError(LegalAnalysisError):
    """Raised when a comparison fails as a whole."""


@dataclass
class UnsupportedAnalysisTypeError(LegalAnalysisError):
    """Raised when re-analysis is requested for an unknown analysis type."""

    def get_supported_types(self) -> list[str]:
        """Return the analysis types that can be regenerated."""
        return self.details.get("supported_types", [])
