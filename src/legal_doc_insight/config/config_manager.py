"""Configuration Manager implementation for the Legal Document Insight system.

This module provides functionality to load, validate, and manage the
vocabulary tables used by the analyzers: risk keywords, summary legal
terms, the simplification dictionary, the document classification cascade,
and the terms-and-conditions triggers and categories.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models.enums import RiskLevel
from ..performance import timed_operation
from .defaults import default_configuration
from .models import (
    CascadeRule,
    ConfigurationError,
    ConfigurationType,
    RiskKeyword,
    SimplificationRule,
    VocabularyConfiguration,
    ValidationResult,
)


Source = Union[str, Path, Dict[str, Any], List[Any]]

CONFIG_FILES = {
    ConfigurationType.RISK_KEYWORDS: "risk_keywords.json",
    ConfigurationType.LEGAL_TERMS: "legal_terms.json",
    ConfigurationType.SIMPLIFICATIONS: "simplifications.json",
    ConfigurationType.CLASSIFICATION: "classification.json",
    ConfigurationType.TERMS: "terms.json",
}


class ConfigurationManager:
    """
    Manager for vocabulary configuration.

    Starts from the built-in tables and lets callers replace any of them
    from JSON files, dictionaries or lists. A table is only replaced when
    the new one validates.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional directory path for configuration files.
        """
        self._config_dir = Path(config_dir) if config_dir else None
        self._configuration = default_configuration()
        self._is_loaded = False

    @property
    def configuration(self) -> VocabularyConfiguration:
        """Get the current vocabulary configuration."""
        return self._configuration

    @property
    def is_loaded(self) -> bool:
        """Check if any table has been loaded over the defaults."""
        return self._is_loaded

    # =========================================================================
    # Risk keywords
    # =========================================================================

    def load_risk_keywords(self, source: Source) -> ValidationResult:
        """
        Load and validate the risk keyword vocabulary.

        Each entry needs a ``keyword`` and a ``severity`` (LOW, MEDIUM or
        HIGH). Entry order is kept: it is the order hits are recorded in.

        Args:
            source: File path, dictionary, or list of dictionaries.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails.
        """
        entries = self._extract_entries(self._parse_source(source), "risk_keywords")

        result = ValidationResult(is_valid=True)
        keywords: List[RiskKeyword] = []

        for i, entry in enumerate(entries):
            entry_result, keyword = self._validate_risk_keyword(entry, index=i)
            result = result.merge(entry_result)
            if keyword:
                keywords.append(keyword)

        names = [k.keyword.lower() for k in keywords]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            result.add_error(f"Duplicate risk keywords found: {sorted(duplicates)}")

        if not keywords and result.is_valid:
            result.add_error("Risk keyword vocabulary must not be empty")

        if not result.is_valid:
            raise ConfigurationError(
                "Risk keyword validation failed",
                validation_result=result
            )

        self._configuration.risk_keywords = keywords
        self._is_loaded = True

        return result

    def _validate_risk_keyword(
        self,
        data: Any,
        index: int = 0
    ) -> Tuple[ValidationResult, Optional[RiskKeyword]]:
        """Validate a single risk keyword dictionary."""
        result = ValidationResult(is_valid=True)
        prefix = f"Risk keyword [{index}]"

        if not isinstance(data, dict):
            result.add_error(f"{prefix}: Expected an object")
            return result, None

        for field_name in ["keyword", "severity"]:
            if field_name not in data:
                result.add_error(f"{prefix}: Missing required field '{field_name}'")

        if not result.is_valid:
            return result, None

        if not isinstance(data["keyword"], str) or not data["keyword"].strip():
            result.add_error(f"{prefix}: 'keyword' must be a non-empty string")

        valid_severities = [level.value for level in RiskLevel]
        severity = data["severity"]
        if not isinstance(severity, str) or severity.upper() not in valid_severities:
            result.add_error(
                f"{prefix}: 'severity' must be one of {valid_severities}"
            )

        if not result.is_valid:
            return result, None

        keyword = RiskKeyword(
            keyword=data["keyword"].strip(),
            severity=RiskLevel(severity.upper()),
            description=data.get("description"),
        )

        return result, keyword

    # =========================================================================
    # Legal terms
    # =========================================================================

    def load_legal_terms(self, source: Source) -> ValidationResult:
        """
        Load the legal terms that boost sentence scores in summaries.

        Args:
            source: File path, ``{"legal_terms": [...]}`` or a list of strings.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails.
        """
        entries = self._extract_entries(self._parse_source(source), "legal_terms")
        result, terms = self._validate_string_list(entries, "Legal term")

        if not result.is_valid:
            raise ConfigurationError(
                "Legal terms validation failed",
                validation_result=result
            )

        self._configuration.legal_terms = terms
        self._is_loaded = True

        return result

    # =========================================================================
    # Simplification dictionary
    # =========================================================================

    def load_simplifications(self, source: Source) -> ValidationResult:
        """
        Load the phrase simplification dictionary.

        Entries are ``{"phrase": ..., "replacement": ...}`` objects and are
        applied in the order given.

        Args:
            source: File path, dictionary, or list of dictionaries.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails.
        """
        entries = self._extract_entries(self._parse_source(source), "simplifications")

        result = ValidationResult(is_valid=True)
        rules: List[SimplificationRule] = []

        for i, entry in enumerate(entries):
            prefix = f"Simplification [{i}]"
            if not isinstance(entry, dict):
                result.add_error(f"{prefix}: Expected an object")
                continue
            missing = [f for f in ["phrase", "replacement"] if f not in entry]
            for field_name in missing:
                result.add_error(f"{prefix}: Missing required field '{field_name}'")
            if missing:
                continue
            if not isinstance(entry["phrase"], str) or not entry["phrase"].strip():
                result.add_error(f"{prefix}: 'phrase' must be a non-empty string")
                continue
            if not isinstance(entry["replacement"], str):
                result.add_error(f"{prefix}: 'replacement' must be a string")
                continue
            rules.append(
                SimplificationRule(
                    phrase=entry["phrase"].strip(),
                    replacement=entry["replacement"],
                )
            )

        phrases = [r.phrase.lower() for r in rules]
        duplicates = {p for p in phrases if phrases.count(p) > 1}
        if duplicates:
            result.add_warning(
                f"Simplification phrases listed more than once: {sorted(duplicates)}"
            )

        if not result.is_valid:
            raise ConfigurationError(
                "Simplification dictionary validation failed",
                validation_result=result
            )

        self._configuration.simplifications = rules
        self._is_loaded = True

        return result

    # =========================================================================
    # Classification cascade
    # =========================================================================

    def load_classification_rules(self, source: Source) -> ValidationResult:
        """
        Load the document classification cascade.

        Accepts ``{"rules": [...], "default": "..."}`` or a list of rules.
        Rules without a priority keep their list position.

        Args:
            source: File path, dictionary, or list of dictionaries.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails.
        """
        raw_data = self._parse_source(source)
        entries = self._extract_entries(raw_data, "rules")
        default = self._configuration.classification_default
        if isinstance(raw_data, dict) and "default" in raw_data:
            default = raw_data["default"]

        result, rules = self._validate_cascade(entries, "Classification rule")
        if not isinstance(default, str) or not default.strip():
            result.add_error("Classification 'default' must be a non-empty string")

        if not result.is_valid:
            raise ConfigurationError(
                "Classification rules validation failed",
                validation_result=result
            )

        rules.sort(key=lambda r: r.priority)
        self._configuration.classification_rules = rules
        self._configuration.classification_default = default.strip()
        self._is_loaded = True

        return result

    # =========================================================================
    # Terms and conditions
    # =========================================================================

    def load_term_rules(self, source: Source) -> ValidationResult:
        """
        Load terms-and-conditions triggers and the term category cascade.

        Accepts ``{"triggers": [...], "categories": [...], "default": "..."}``;
        any of the three keys may be omitted to keep the current value.

        Args:
            source: File path or dictionary.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails.
        """
        raw_data = self._parse_source(source)
        result = ValidationResult(is_valid=True)

        if not isinstance(raw_data, dict):
            result.add_error("Term rules must be an object with 'triggers' and/or 'categories'")
            raise ConfigurationError(
                "Term rules validation failed",
                validation_result=result
            )

        triggers = self._configuration.term_triggers
        if "triggers" in raw_data:
            trigger_result, triggers = self._validate_string_list(
                raw_data["triggers"], "Term trigger"
            )
            result = result.merge(trigger_result)

        categories = self._configuration.term_category_rules
        if "categories" in raw_data:
            category_result, categories = self._validate_cascade(
                raw_data["categories"], "Term category"
            )
            result = result.merge(category_result)

        default = raw_data.get("default", self._configuration.term_category_default)
        if not isinstance(default, str) or not default.strip():
            result.add_error("Term category 'default' must be a non-empty string")

        if not result.is_valid:
            raise ConfigurationError(
                "Term rules validation failed",
                validation_result=result
            )

        self._configuration.term_triggers = triggers
        self._configuration.term_category_rules = sorted(categories, key=lambda r: r.priority)
        self._configuration.term_category_default = default.strip()
        self._is_loaded = True

        return result

    # =========================================================================
    # Shared validators
    # =========================================================================

    def _validate_string_list(
        self,
        entries: Any,
        label: str
    ) -> Tuple[ValidationResult, List[str]]:
        """Validate a non-empty list of non-empty strings."""
        result = ValidationResult(is_valid=True)
        values: List[str] = []

        if not isinstance(entries, list):
            result.add_error(f"{label}s must be a list")
            return result, values

        for i, entry in enumerate(entries):
            if not isinstance(entry, str) or not entry.strip():
                result.add_error(f"{label} [{i}]: must be a non-empty string")
            else:
                values.append(entry.strip())

        if not values and result.is_valid:
            result.add_error(f"{label}s must not be empty")

        lowered = [v.lower() for v in values]
        duplicates = {v for v in lowered if lowered.count(v) > 1}
        if duplicates:
            result.add_warning(f"{label}s listed more than once: {sorted(duplicates)}")

        return result, values

    def _validate_cascade(
        self,
        entries: Any,
        label: str
    ) -> Tuple[ValidationResult, List[CascadeRule]]:
        """Validate a list of cascade rule dictionaries."""
        result = ValidationResult(is_valid=True)
        rules: List[CascadeRule] = []

        if not isinstance(entries, list):
            result.add_error(f"{label}s must be a list")
            return result, rules

        for i, data in enumerate(entries):
            prefix = f"{label} [{i}]"
            if not isinstance(data, dict):
                result.add_error(f"{prefix}: Expected an object")
                continue

            missing = [f for f in ["label", "keywords"] if f not in data]
            for field_name in missing:
                result.add_error(f"{prefix}: Missing required field '{field_name}'")
            if missing:
                continue

            rule_valid = True
            if not isinstance(data["label"], str) or not data["label"].strip():
                result.add_error(f"{prefix}: 'label' must be a non-empty string")
                rule_valid = False

            keywords = data["keywords"]
            if not isinstance(keywords, list) or not keywords:
                result.add_error(f"{prefix}: 'keywords' must be a non-empty list")
                rule_valid = False
            elif not all(isinstance(k, str) and k.strip() for k in keywords):
                result.add_error(f"{prefix}: All keywords must be non-empty strings")
                rule_valid = False

            priority = data.get("priority", i)
            if not isinstance(priority, int) or isinstance(priority, bool):
                result.add_error(f"{prefix}: 'priority' must be an integer")
                rule_valid = False

            if rule_valid:
                rules.append(
                    CascadeRule(
                        label=data["label"].strip(),
                        keywords=[k.strip() for k in keywords],
                        priority=priority,
                        description=data.get("description"),
                    )
                )

        priorities = [r.priority for r in rules]
        if len(priorities) != len(set(priorities)):
            result.add_warning(
                f"Multiple {label.lower()}s share the same priority. "
                "Consider using unique priorities for deterministic ordering."
            )

        return result, rules

    # =========================================================================
    # Configuration Validation
    # =========================================================================

    def validate_configuration(
        self,
        config: Optional[VocabularyConfiguration] = None
    ) -> ValidationResult:
        """
        Validate the complete vocabulary configuration.

        Checks for:
        - Risk keywords contained in other risk keywords (double counting)
        - Cascade keywords shadowed by an earlier rule
        - Repeated simplification phrases

        Args:
            config: Configuration to validate. Uses current config if None.

        Returns:
            ValidationResult with all errors and warnings.
        """
        config = config or self._configuration
        result = ValidationResult(is_valid=True)

        if not config.risk_keywords:
            result.add_error("Risk keyword vocabulary is empty")

        result = result.merge(self._validate_risk_overlap(config))
        result = result.merge(
            self._validate_cascade_shadowing(
                config.get_classification_rules(), "classification"
            )
        )
        result = result.merge(
            self._validate_cascade_shadowing(
                config.get_term_category_rules(), "term category"
            )
        )

        phrases = [r.phrase.lower() for r in config.simplifications]
        duplicates = {p for p in phrases if phrases.count(p) > 1}
        if duplicates:
            result.add_warning(
                f"Simplification phrases listed more than once: {sorted(duplicates)}"
            )

        return result

    def _validate_risk_overlap(self, config: VocabularyConfiguration) -> ValidationResult:
        """Warn about risk keywords that also count as a shorter keyword."""
        result = ValidationResult(is_valid=True)
        keywords = [k.keyword.lower() for k in config.risk_keywords]

        for keyword in keywords:
            for other in keywords:
                if other != keyword and other in keyword:
                    result.add_warning(
                        f"Risk keyword '{keyword}' also matches '{other}'; "
                        f"sentences containing it are counted for both"
                    )

        return result

    def _validate_cascade_shadowing(
        self,
        rules: List[CascadeRule],
        name: str
    ) -> ValidationResult:
        """Warn about keywords that can never decide a cascade."""
        result = ValidationResult(is_valid=True)
        earlier: Dict[str, str] = {}  # keyword -> label of first rule using it

        for rule in rules:
            for keyword in rule.keywords:
                keyword_lower = keyword.lower()
                if keyword_lower in earlier:
                    result.add_warning(
                        f"Keyword '{keyword}' of {name} rule '{rule.label}' is "
                        f"shadowed by earlier rule '{earlier[keyword_lower]}'"
                    )
                else:
                    earlier[keyword_lower] = rule.label

        return result

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _parse_source(self, source: Source) -> Union[Dict[str, Any], List[Any]]:
        """Parse configuration source to raw data."""
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")

            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

        return source

    def _extract_entries(self, raw_data: Union[Dict[str, Any], List[Any]], key: str) -> List[Any]:
        """Get the entry list from a wrapped dictionary, a single entry or a list."""
        if isinstance(raw_data, dict):
            if key in raw_data:
                return raw_data[key]
            return [raw_data]
        return raw_data

    @timed_operation("load_configuration")
    def load_from_directory(self, config_dir: Union[str, Path]) -> ValidationResult:
        """
        Load all configuration files from a directory.

        Expects files named:
        - risk_keywords.json
        - legal_terms.json
        - simplifications.json
        - classification.json
        - terms.json

        Missing files keep the current table.

        Args:
            config_dir: Directory containing configuration files.

        Returns:
            Combined ValidationResult for all loaded configurations.
        """
        config_dir = Path(config_dir)
        result = ValidationResult(is_valid=True)

        loaders = {
            ConfigurationType.RISK_KEYWORDS: self.load_risk_keywords,
            ConfigurationType.LEGAL_TERMS: self.load_legal_terms,
            ConfigurationType.SIMPLIFICATIONS: self.load_simplifications,
            ConfigurationType.CLASSIFICATION: self.load_classification_rules,
            ConfigurationType.TERMS: self.load_term_rules,
        }

        for config_type, loader in loaders.items():
            path = config_dir / CONFIG_FILES[config_type]
            if not path.exists():
                continue
            try:
                result = result.merge(loader(path))
            except ConfigurationError as e:
                result.add_error(f"{config_type.value} loading failed: {e.message}")
                if e.validation_result:
                    result = result.merge(e.validation_result)

        self._config_dir = config_dir
        return result

    def save_to_directory(
        self,
        config_dir: Optional[Union[str, Path]] = None
    ) -> None:
        """
        Save current configuration to a directory.

        Args:
            config_dir: Directory to save to. Uses current config_dir if None.
        """
        config_dir = Path(config_dir) if config_dir else self._config_dir
        if not config_dir:
            raise ConfigurationError("No configuration directory specified")

        config_dir.mkdir(parents=True, exist_ok=True)
        data = self.to_dict()

        sections = {
            ConfigurationType.RISK_KEYWORDS: {"risk_keywords": data["risk_keywords"]},
            ConfigurationType.LEGAL_TERMS: {"legal_terms": data["legal_terms"]},
            ConfigurationType.SIMPLIFICATIONS: {"simplifications": data["simplifications"]},
            ConfigurationType.CLASSIFICATION: data["classification"],
            ConfigurationType.TERMS: data["terms"],
        }

        for config_type, payload in sections.items():
            with open(config_dir / CONFIG_FILES[config_type], "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)

    def reset(self) -> None:
        """Reset configuration to the built-in tables."""
        self._configuration = default_configuration()
        self._is_loaded = False

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        config = self._configuration
        return {
            "version": config.version,
            "risk_keywords": [
                {
                    "keyword": k.keyword,
                    "severity": k.severity.value,
                    "description": k.description,
                }
                for k in config.risk_keywords
            ],
            "legal_terms": list(config.legal_terms),
            "simplifications": [
                {"phrase": r.phrase, "replacement": r.replacement}
                for r in config.simplifications
            ],
            "classification": {
                "rules": [self._rule_to_dict(r) for r in config.get_classification_rules()],
                "default": config.classification_default,
            },
            "terms": {
                "triggers": list(config.term_triggers),
                "categories": [self._rule_to_dict(r) for r in config.get_term_category_rules()],
                "default": config.term_category_default,
            },
            "metadata": config.metadata,
        }

    @staticmethod
    def _rule_to_dict(rule: CascadeRule) -> Dict[str, Any]:
        return {
            "label": rule.label,
            "keywords": list(rule.keywords),
            "priority": rule.priority,
            "description": rule.description,
        }
