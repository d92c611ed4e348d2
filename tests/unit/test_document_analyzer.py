"""Unit tests for the DocumentAnalyzer."""

import dataclasses
from unittest.mock import Mock

import pytest
import spacy

from legal_doc_insight.analyzers import (
    DocumentAnalyzer,
    EntityExtractor,
    SentimentAnalyzer,
    resolve_analysis_type,
)
from legal_doc_insight.analyzers.summarizer import EMPTY_SUMMARY, NO_CONTENT_SUMMARY
from legal_doc_insight.config import ConfigurationManager
from legal_doc_insight.exceptions import AnalysisPipelineError, UnsupportedAnalysisTypeError
from legal_doc_insight.models import (
    AnalysisType,
    Entities,
    RiskAnalysis,
    RiskLevel,
    Sentiment,
    SentimentLabel,
)


CONTRACT = (
    "This Agreement is made on January 15, 2025 between Acme Corp and Beta LLC. "
    "The Supplier shall pay damages for any breach of this agreement. "
    "Either party may seek termination with 30 days notice. "
    "Contact legal@acme.com with questions."
)

LEXICON = {"good": 1.9, "fair": 1.3, "terrible": -2.5, "disaster": -3.1}


@pytest.fixture
def analyzer():
    """Analyzer that needs neither a trained spaCy model nor a downloaded lexicon."""
    return DocumentAnalyzer(
        entity_extractor=EntityExtractor(nlp=spacy.blank("en")),
        sentiment_analyzer=SentimentAnalyzer(lexicon=LEXICON),
    )


class TestAnalyze:
    """Tests for full document analysis."""

    def test_empty_text_gives_defaults(self, analyzer):
        """Test that empty text produces a complete, empty analysis."""
        outcome = analyzer.analyze_detailed("")

        analysis = outcome.analysis
        assert analysis.summary == NO_CONTENT_SUMMARY
        assert analysis.entities == Entities()
        assert analysis.risks == RiskAnalysis()
        assert analysis.simplified == ""
        assert analysis.keywords == []
        assert analysis.terms_and_conditions == []
        assert analysis.sentiment == Sentiment()
        assert analysis.document_type == "Legal Document"
        assert not outcome.degraded

    def test_contract(self, analyzer):
        """Test the analysis of a short contract."""
        analysis = analyzer.analyze(CONTRACT)

        assert analysis.document_type == "Contract/Agreement"

        assert analysis.risks.risk_keywords == ["damages", "breach", "termination"]
        assert analysis.risks.total_risks == 3
        assert analysis.risks.risk_level == RiskLevel.MEDIUM

        assert analysis.entities.emails == ["legal@acme.com"]
        assert analysis.entities.dates == ["January 15, 2025"]

        assert [(t.position, t.type) for t in analysis.terms_and_conditions] == [
            (0, "General"),
            (1, "Liability"),
            (2, "Termination"),
        ]

        assert analysis.summary.startswith("The Supplier shall pay damages")
        assert analysis.sentiment.label == SentimentLabel.NEUTRAL

        scores = [k.score for k in analysis.keywords]
        assert analysis.keywords
        assert scores == sorted(scores, reverse=True)
        assert all(len(k.word) >= 4 for k in analysis.keywords)

    def test_non_text_input_raises(self, analyzer):
        """Test that input that is not a string is rejected."""
        with pytest.raises(AnalysisPipelineError) as exc_info:
            analyzer.analyze(None)

        assert exc_info.value.stage == "analyze"
        assert "expected text" in exc_info.value.message

    def test_analysis_is_immutable(self, analyzer):
        """Test that an analysis cannot be changed after creation."""
        analysis = analyzer.analyze(CONTRACT)

        with pytest.raises(dataclasses.FrozenInstanceError):
            analysis.summary = "changed"


class TestStageDegradation:
    """Tests for falling back to defaults when a sub-analysis fails."""

    def test_failing_sentiment_uses_default(self):
        """Test that a failing sentiment stage is replaced by neutral sentiment."""
        sentiment = Mock()
        sentiment.analyze.side_effect = RuntimeError("lexicon offline")
        analyzer = DocumentAnalyzer(
            entity_extractor=EntityExtractor(nlp=spacy.blank("en")),
            sentiment_analyzer=sentiment,
        )

        outcome = analyzer.analyze_detailed(CONTRACT)

        assert outcome.degraded
        assert outcome.analysis.sentiment == Sentiment()
        assert [f.stage for f in outcome.stage_failures] == ["sentiment"]
        assert outcome.stage_failures[0].error_type == "RuntimeError"
        assert outcome.analysis.risks.total_risks == 3

    def test_failing_entity_category_is_reported(self):
        """Test that entity category failures appear among the stage failures."""

        class FailingEmails(EntityExtractor):
            def _extract_category(self, doc, category):
                if category == "emails":
                    raise RuntimeError("matcher error")
                return super()._extract_category(doc, category)

        analyzer = DocumentAnalyzer(
            entity_extractor=FailingEmails(nlp=spacy.blank("en")),
            sentiment_analyzer=SentimentAnalyzer(lexicon=LEXICON),
        )

        outcome = analyzer.analyze_detailed(CONTRACT)

        assert outcome.analysis.entities.emails == []
        assert outcome.analysis.entities.dates == ["January 15, 2025"]
        assert [f.stage for f in outcome.stage_failures] == ["entities.emails"]


class TestRunAnalysis:
    """Tests for running a single sub-analysis."""

    def test_summary_max_length(self, analyzer):
        """Test that max_length applies to summaries."""
        assert analyzer.run_analysis("summary", CONTRACT, max_length=20) == EMPTY_SUMMARY

    def test_keywords_top_n(self, analyzer):
        """Test that top_n limits the keywords."""
        keywords = analyzer.run_analysis(AnalysisType.KEYWORDS, CONTRACT, top_n=3)

        assert len(keywords) == 3

    def test_unknown_parameters_ignored(self, analyzer):
        """Test that parameters a sub-analysis does not use are ignored."""
        risks = analyzer.run_analysis("risk", CONTRACT, max_length=5, top_n=1)

        assert risks.total_risks == 3

    def test_document_type(self, analyzer):
        """Test running the classifier alone."""
        assert analyzer.run_analysis("document_type", "Privacy policy") == "Policy/Terms"

    def test_unsupported_type(self, analyzer):
        """Test that an unknown analysis type is rejected."""
        with pytest.raises(UnsupportedAnalysisTypeError) as exc_info:
            analyzer.run_analysis("tone", CONTRACT)

        assert exc_info.value.message == "Invalid analysis type: tone"
        assert "summary" in exc_info.value.get_supported_types()

    def test_resolve_analysis_type(self):
        """Test converting names to analysis types."""
        assert resolve_analysis_type("terms") == AnalysisType.TERMS
        assert resolve_analysis_type(AnalysisType.RISK) == AnalysisType.RISK


class TestConfigure:
    """Tests for applying a new vocabulary configuration."""

    def test_configure_replaces_tables(self, analyzer):
        """Test that risk and classification follow the new tables."""
        manager = ConfigurationManager()
        manager.load_risk_keywords({"risk_keywords": [{"keyword": "escrow", "severity": "high"}]})
        manager.load_classification_rules({
            "rules": [{"label": "Lease", "keywords": ["tenant"]}],
            "default": "Other",
        })

        analyzer.configure(manager.configuration)

        assert analyzer.run_analysis("risk", "Funds held in escrow.").risk_keywords == ["escrow"]
        assert analyzer.run_analysis("risk", CONTRACT).risk_keywords == []
        assert analyzer.run_analysis("document_type", "The tenant pays.") == "Lease"
        assert analyzer.run_analysis("document_type", CONTRACT) == "Other"

    def test_configure_keeps_injected_analyzers(self, analyzer):
        """Test that entity and sentiment analyzers survive reconfiguration."""
        sentiment = analyzer.run_analysis("sentiment", "A good and fair deal.")

        analyzer.configure(ConfigurationManager().configuration)

        assert analyzer.run_analysis("sentiment", "A good and fair deal.") == sentiment
        assert analyzer.run_analysis("entities", CONTRACT).emails == ["legal@acme.com"]


class TestAnalyzerSerialization:
    """Tests for the analyzer's JSON methods."""

    def test_round_trip(self, analyzer):
        """Test that a serialized analysis deserializes to an equal one."""
        analysis = analyzer.analyze(CONTRACT)

        assert analyzer.deserialize(analyzer.serialize(analysis)) == analysis

    def test_invalid_json(self, analyzer):
        """Test that malformed JSON is rejected."""
        with pytest.raises(ValueError, match="Invalid JSON"):
            analyzer.deserialize("{not json")
