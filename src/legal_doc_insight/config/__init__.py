"""Vocabulary configuration for the Legal Document Insight system."""

from .config_manager import ConfigurationManager
from .defaults import default_configuration
from .models import (
    CascadeRule,
    ConfigurationError,
    ConfigurationType,
    RiskKeyword,
    SimplificationRule,
    ValidationResult,
    VocabularyConfiguration,
    first_match,
)

__all__ = [
    "ConfigurationManager",
    "ConfigurationType",
    "RiskKeyword",
    "SimplificationRule",
    "CascadeRule",
    "VocabularyConfiguration",
    "ConfigurationError",
    "ValidationResult",
    "default_configuration",
    "first_match",
]
