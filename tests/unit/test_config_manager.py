"""Unit tests for the Configuration Manager."""

import json
import tempfile
from pathlib import Path

import pytest

from legal_doc_insight.analyzers import DocumentClassifier, RiskAnalyzer
from legal_doc_insight.config import (
    CascadeRule,
    ConfigurationError,
    ConfigurationManager,
    ValidationResult,
    default_configuration,
    first_match,
)
from legal_doc_insight.models import RiskLevel


class TestDefaultConfiguration:
    """Tests for the built-in vocabulary tables."""

    def test_default_table_sizes(self):
        """Test that the built-in tables have their expected sizes."""
        config = default_configuration()

        assert len(config.risk_keywords) == 19
        assert len(config.legal_terms) == 21
        assert len(config.simplifications) == 16
        assert len({r.phrase for r in config.simplifications}) == 15
        assert len(config.term_triggers) == 21
        assert config.classification_default == "Legal Document"
        assert config.term_category_default == "General"

    def test_default_severities(self):
        """Test the fixed severity of risk keywords."""
        config = default_configuration()

        for keyword in ["liability", "damages", "penalty", "breach"]:
            assert config.get_severity(keyword) == RiskLevel.HIGH
        for keyword in ["termination", "default", "warranty"]:
            assert config.get_severity(keyword) == RiskLevel.MEDIUM
        assert config.get_severity("arbitration") == RiskLevel.LOW
        assert config.get_severity("unknown word") == RiskLevel.LOW

    def test_risk_keyword_order_starts_with_liability(self):
        """Test that risk keywords keep their vocabulary order."""
        config = default_configuration()

        assert [k.keyword for k in config.risk_keywords[:4]] == [
            "liability", "damages", "penalty", "breach"
        ]
        assert config.risk_keywords[-1].keyword == "cure period"

    def test_classification_rules_in_priority_order(self):
        """Test that the classification cascade is evaluated in order."""
        rules = default_configuration().get_classification_rules()

        assert [r.label for r in rules] == [
            "Contract/Agreement", "Policy/Terms", "Notice/Letter", "Legal Clause"
        ]

    def test_first_match_falls_back_to_default(self):
        """Test that the cascade returns the default when nothing matches."""
        rules = [CascadeRule(label="A", keywords=["alpha"], priority=1)]

        assert first_match(rules, "ALPHA beta", "Other") == "A"
        assert first_match(rules, "gamma", "Other") == "Other"


class TestRiskKeywords:
    """Tests for risk keyword configuration."""

    def test_load_risk_keywords_from_dict(self):
        """Test loading risk keywords from a wrapped dictionary."""
        manager = ConfigurationManager()

        result = manager.load_risk_keywords({
            "risk_keywords": [
                {"keyword": "escrow", "severity": "high", "description": "Funds held back"},
                {"keyword": "audit", "severity": "LOW"},
            ]
        })

        assert result.is_valid
        assert manager.is_loaded
        keywords = manager.configuration.risk_keywords
        assert [k.keyword for k in keywords] == ["escrow", "audit"]
        assert keywords[0].severity == RiskLevel.HIGH
        assert keywords[1].severity == RiskLevel.LOW

    def test_missing_severity_keeps_previous_table(self):
        """Test that a failed load leaves the current table untouched."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_risk_keywords([{"keyword": "escrow"}])

        assert "severity" in str(exc_info.value.validation_result.errors)
        assert len(manager.configuration.risk_keywords) == 19
        assert not manager.is_loaded

    def test_invalid_severity(self):
        """Test that unknown severities are rejected."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_risk_keywords([{"keyword": "escrow", "severity": "CRITICAL"}])

        assert not exc_info.value.validation_result.is_valid

    def test_duplicate_keywords(self):
        """Test that duplicate keywords are rejected regardless of case."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_risk_keywords([
                {"keyword": "Escrow", "severity": "HIGH"},
                {"keyword": "escrow", "severity": "LOW"},
            ])

        assert "Duplicate" in exc_info.value.validation_result.errors[0]

    def test_empty_vocabulary(self):
        """Test that an empty risk vocabulary is rejected."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_risk_keywords({"risk_keywords": []})

    def test_load_risk_keywords_from_file(self):
        """Test loading risk keywords from a JSON file."""
        manager = ConfigurationManager()

        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({"risk_keywords": [{"keyword": "lien", "severity": "MEDIUM"}]}, f)
            temp_path = f.name

        try:
            result = manager.load_risk_keywords(temp_path)
            assert result.is_valid
            assert manager.configuration.get_severity("lien") == RiskLevel.MEDIUM
        finally:
            Path(temp_path).unlink()

    def test_missing_file(self):
        """Test that a missing file raises a configuration error."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_risk_keywords("/nonexistent/risk_keywords.json")

        assert "not found" in exc_info.value.message

    def test_loaded_keywords_drive_risk_analysis(self):
        """Test that a loaded vocabulary is used by the risk analyzer."""
        manager = ConfigurationManager()
        manager.load_risk_keywords([{"keyword": "escrow", "severity": "HIGH"}])

        analyzer = RiskAnalyzer(risk_keywords=manager.configuration.risk_keywords)
        risks = analyzer.analyze("The escrow is released on closing. The breach is cured.")

        assert risks.risk_keywords == ["escrow"]
        assert risks.total_risks == 1


class TestOtherTables:
    """Tests for legal terms, simplifications and cascades."""

    def test_load_legal_terms_from_list(self):
        """Test loading summary legal terms from a list."""
        manager = ConfigurationManager()

        result = manager.load_legal_terms(["escrow", "closing"])

        assert result.is_valid
        assert manager.configuration.legal_terms == ["escrow", "closing"]

    def test_legal_terms_must_be_strings(self):
        """Test that non-string legal terms are rejected."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_legal_terms({"legal_terms": ["escrow", 42]})

    def test_load_simplifications(self):
        """Test loading the simplification dictionary."""
        manager = ConfigurationManager()

        result = manager.load_simplifications({
            "simplifications": [
                {"phrase": "inter alia", "replacement": "among other things"},
                {"phrase": "forthwith", "replacement": "immediately"},
            ]
        })

        assert result.is_valid
        assert [r.phrase for r in manager.configuration.simplifications] == [
            "inter alia", "forthwith"
        ]

    def test_repeated_simplification_phrase_is_warning(self):
        """Test that a repeated phrase only produces a warning."""
        manager = ConfigurationManager()

        result = manager.load_simplifications([
            {"phrase": "forthwith", "replacement": "immediately"},
            {"phrase": "Forthwith", "replacement": "at once"},
        ])

        assert result.is_valid
        assert len(result.warnings) == 1

    def test_simplification_missing_replacement(self):
        """Test that entries need a replacement."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_simplifications([{"phrase": "forthwith"}])

    def test_load_classification_rules(self):
        """Test loading a classification cascade with a custom default."""
        manager = ConfigurationManager()

        result = manager.load_classification_rules({
            "rules": [
                {"label": "Lease", "keywords": ["lease", "tenant"]},
                {"label": "Employment", "keywords": ["employee"]},
            ],
            "default": "Other",
        })

        assert result.is_valid
        config = manager.configuration
        classifier = DocumentClassifier(
            rules=config.get_classification_rules(),
            default_label=config.classification_default,
        )
        assert classifier.classify("The Tenant shall pay rent.") == "Lease"
        assert classifier.classify("The employee and the tenant agree.") == "Lease"
        assert classifier.classify("Nothing relevant here.") == "Other"

    def test_classification_rule_without_keywords(self):
        """Test that rules need at least one keyword."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_classification_rules([{"label": "Lease", "keywords": []}])

    def test_shared_priority_warning(self):
        """Test that rules sharing a priority produce a warning."""
        manager = ConfigurationManager()

        result = manager.load_classification_rules([
            {"label": "A", "keywords": ["a"], "priority": 1},
            {"label": "B", "keywords": ["b"], "priority": 1},
        ])

        assert result.is_valid
        assert any("same priority" in w for w in result.warnings)

    def test_load_term_rules(self):
        """Test replacing triggers and keeping the default categories."""
        manager = ConfigurationManager()

        result = manager.load_term_rules({"triggers": ["undertakes"]})

        assert result.is_valid
        assert manager.configuration.term_triggers == ["undertakes"]
        assert len(manager.configuration.term_category_rules) == 5

    def test_term_rules_must_be_object(self):
        """Test that term rules must be given as an object."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_term_rules(["shall"])


class TestConfigurationValidation:
    """Tests for complete configuration validation."""

    def test_default_configuration_is_valid_with_warnings(self):
        """Test the warnings reported for the built-in tables."""
        manager = ConfigurationManager()

        result = manager.validate_configuration()

        assert result.is_valid
        assert any("'liquidated damages' also matches 'damages'" in w for w in result.warnings)
        assert any("'material breach' also matches 'breach'" in w for w in result.warnings)
        assert any("hereinafter" in w for w in result.warnings)

    def test_shadowed_cascade_keyword(self):
        """Test that keywords decided by an earlier rule are reported."""
        manager = ConfigurationManager()
        manager.load_classification_rules([
            {"label": "A", "keywords": ["deed"], "priority": 1},
            {"label": "B", "keywords": ["deed", "will"], "priority": 2},
        ])

        result = manager.validate_configuration()

        assert any("shadowed by earlier rule 'A'" in w for w in result.warnings)

    def test_validation_result_merge(self):
        """Test merging validation results."""
        first = ValidationResult(is_valid=True, warnings=["w1"])
        second = ValidationResult(is_valid=True)
        second.add_error("e1")

        merged = first.merge(second)

        assert not merged.is_valid
        assert merged.errors == ["e1"]
        assert merged.warnings == ["w1"]


class TestConfigurationPersistence:
    """Tests for saving, loading and resetting configuration."""

    def test_save_and_load_from_directory(self):
        """Test saving and loading configuration from a directory."""
        manager = ConfigurationManager()
        manager.load_risk_keywords([{"keyword": "escrow", "severity": "HIGH"}])

        with tempfile.TemporaryDirectory() as temp_dir:
            manager.save_to_directory(temp_dir)

            for name in [
                "risk_keywords.json", "legal_terms.json", "simplifications.json",
                "classification.json", "terms.json",
            ]:
                assert (Path(temp_dir) / name).exists()

            new_manager = ConfigurationManager()
            result = new_manager.load_from_directory(temp_dir)

            assert result.is_valid
            assert [k.keyword for k in new_manager.configuration.risk_keywords] == ["escrow"]
            assert new_manager.configuration.legal_terms == manager.configuration.legal_terms
            assert len(new_manager.configuration.classification_rules) == 4

    def test_partial_directory_keeps_defaults(self):
        """Test that missing files keep the current tables."""
        with tempfile.TemporaryDirectory() as temp_dir:
            (Path(temp_dir) / "legal_terms.json").write_text(
                json.dumps({"legal_terms": ["escrow"]}), encoding="utf-8"
            )

            manager = ConfigurationManager()
            result = manager.load_from_directory(temp_dir)

            assert result.is_valid
            assert manager.configuration.legal_terms == ["escrow"]
            assert len(manager.configuration.risk_keywords) == 19

    def test_invalid_file_in_directory(self):
        """Test that an invalid file is reported without raising."""
        with tempfile.TemporaryDirectory() as temp_dir:
            (Path(temp_dir) / "risk_keywords.json").write_text(
                json.dumps([{"keyword": "escrow", "severity": "EXTREME"}]), encoding="utf-8"
            )

            manager = ConfigurationManager()
            result = manager.load_from_directory(temp_dir)

            assert not result.is_valid
            assert any("risk_keywords loading failed" in e for e in result.errors)
            assert len(manager.configuration.risk_keywords) == 19

    def test_save_without_directory(self):
        """Test that saving needs a directory."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.save_to_directory()

    def test_to_dict_export(self):
        """Test exporting configuration to dictionary."""
        config_dict = ConfigurationManager().to_dict()

        assert config_dict["risk_keywords"][0] == {
            "keyword": "liability", "severity": "HIGH", "description": None
        }
        assert len(config_dict["legal_terms"]) == 21
        assert config_dict["classification"]["default"] == "Legal Document"
        assert config_dict["terms"]["default"] == "General"

    def test_reset_configuration(self):
        """Test resetting configuration."""
        manager = ConfigurationManager()
        manager.load_legal_terms(["escrow"])

        assert manager.is_loaded

        manager.reset()

        assert not manager.is_loaded
        assert len(manager.configuration.legal_terms) == 21
