"""Data models for vocabulary configuration."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..models.enums import RiskLevel


class ConfigurationType(Enum):
    """Types of configuration supported by the system."""
    RISK_KEYWORDS = "risk_keywords"
    LEGAL_TERMS = "legal_terms"
    SIMPLIFICATIONS = "simplifications"
    CLASSIFICATION = "classification"
    TERMS = "terms"


@dataclass
class RiskKeyword:
    """A risk vocabulary entry with its fixed severity."""
    keyword: str
    severity: RiskLevel
    description: Optional[str] = None

    def matches(self, text: str) -> bool:
        """Check if the keyword occurs in text (case-insensitive substring)."""
        return self.keyword.lower() in text.lower()


@dataclass
class SimplificationRule:
    """Plain-language replacement for an archaic legal phrase."""
    phrase: str
    replacement: str


@dataclass
class CascadeRule:
    """
    One rule of an ordered first-match cascade.

    A rule matches when any of its keywords is a case-insensitive
    substring of the text. Rules are evaluated by ascending priority.
    """
    label: str
    keywords: List[str]
    priority: int = 0
    description: Optional[str] = None

    def matches(self, text: str) -> bool:
        """Check if text matches this rule."""
        text_lower = text.lower()
        return any(keyword.lower() in text_lower for keyword in self.keywords)


def first_match(rules: List[CascadeRule], text: str, default: str) -> str:
    """Return the label of the first matching rule, or the default."""
    for rule in sorted(rules, key=lambda r: r.priority):
        if rule.matches(text):
            return rule.label
    return default


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings
        )


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, validation_result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.message = message
        self.validation_result = validation_result


@dataclass
class VocabularyConfiguration:
    """
    Complete vocabulary configuration.

    Aggregates every fixed table the analyzers read: risk keywords,
    summary legal terms, simplification dictionary, the document
    classification cascade, and the terms-and-conditions triggers and
    category cascade.
    """
    risk_keywords: List[RiskKeyword] = field(default_factory=list)
    legal_terms: List[str] = field(default_factory=list)
    simplifications: List[SimplificationRule] = field(default_factory=list)
    classification_rules: List[CascadeRule] = field(default_factory=list)
    classification_default: str = "Legal Document"
    term_triggers: List[str] = field(default_factory=list)
    term_category_rules: List[CascadeRule] = field(default_factory=list)
    term_category_default: str = "General"
    version: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_severity(self, keyword: str) -> RiskLevel:
        """Get the severity of a risk keyword (LOW when unknown)."""
        keyword_lower = keyword.lower()
        for entry in self.risk_keywords:
            if entry.keyword.lower() == keyword_lower:
                return entry.severity
        return RiskLevel.LOW

    def get_classification_rules(self) -> List[CascadeRule]:
        """Get classification rules in evaluation order."""
        return sorted(self.classification_rules, key=lambda r: r.priority)

    def get_term_category_rules(self) -> List[CascadeRule]:
        """Get term category rules in evaluation order."""
        return sorted(self.term_category_rules, key=lambda r: r.priority)
