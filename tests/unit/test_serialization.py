"""Unit tests for analysis and comparison serialization."""

import json

import pytest

from legal_doc_insight.comparison import ComparisonEngine
from legal_doc_insight.models import (
    Analysis,
    AnalyzedDocument,
    Entities,
    Keyword,
    RiskAnalysis,
    RiskDetail,
    RiskLevel,
    Sentiment,
    SentimentLabel,
    TermsAndCondition,
)
from legal_doc_insight.serialization import AnalysisSerializer, ComparisonSerializer


@pytest.fixture
def analysis():
    detail = RiskDetail(
        keyword="breach",
        sentence="Any breach ends this lease",
        position=1,
        severity=RiskLevel.HIGH,
    )
    return Analysis(
        summary="Any breach ends this lease.",
        entities=Entities(persons=["Jane Roe"], emails=["jane@example.com"]),
        risks=RiskAnalysis(
            total_risks=1,
            risk_keywords=["breach"],
            risk_details={"breach": [detail]},
            risk_level=RiskLevel.MEDIUM,
        ),
        simplified="Any breach ends this lease.",
        keywords=[Keyword(word="breach", score=1.69)],
        terms_and_conditions=[
            TermsAndCondition(sentence="Any breach ends this lease", position=1, type="Termination")
        ],
        sentiment=Sentiment(score=-0.5, label=SentimentLabel.NEGATIVE, magnitude=0.5),
        document_type="Legal Document",
    )


@pytest.fixture
def serializer():
    return AnalysisSerializer()


class TestAnalysisSerializer:
    """Tests for AnalysisSerializer."""

    def test_to_dict(self, serializer, analysis):
        """Test the dictionary layout."""
        data = serializer.to_dict(analysis)

        assert list(data) == [
            "summary", "entities", "risks", "simplified", "keywords",
            "terms_and_conditions", "sentiment", "document_type",
        ]
        assert data["entities"]["persons"] == ["Jane Roe"]
        assert data["entities"]["places"] == []
        assert data["risks"]["risk_level"] == "MEDIUM"
        assert data["risks"]["risk_details"]["breach"][0]["severity"] == "HIGH"
        assert data["sentiment"] == {"score": -0.5, "label": "negative", "magnitude": 0.5}

    def test_round_trip(self, serializer, analysis):
        """Test that JSON output deserializes to an equal analysis."""
        assert serializer.deserialize(serializer.serialize(analysis)) == analysis

    def test_invalid_json(self, serializer):
        """Test that malformed JSON is rejected."""
        with pytest.raises(ValueError, match="Invalid JSON"):
            serializer.deserialize("{")

    def test_missing_field(self, serializer, analysis):
        """Test that a missing top-level field is rejected."""
        data = serializer.to_dict(analysis)
        del data["sentiment"]

        with pytest.raises(ValueError, match="Missing required field 'sentiment'"):
            serializer.from_dict(data)

    def test_invalid_risk_level(self, serializer, analysis):
        """Test that unknown risk levels are rejected."""
        data = serializer.to_dict(analysis)
        data["risks"]["risk_level"] = "SEVERE"

        with pytest.raises(ValueError, match="Invalid risk level"):
            serializer.from_dict(data)

    def test_invalid_sentiment_label(self, serializer, analysis):
        """Test that unknown sentiment labels are rejected."""
        data = serializer.to_dict(analysis)
        data["sentiment"]["label"] = "angry"

        with pytest.raises(ValueError, match="Invalid sentiment label"):
            serializer.from_dict(data)

    def test_unknown_entity_category(self, serializer, analysis):
        """Test that unknown entity categories are rejected."""
        data = serializer.to_dict(analysis)
        data["entities"]["vehicles"] = ["Truck"]

        with pytest.raises(ValueError, match="Unknown entity categories"):
            serializer.from_dict(data)

    def test_missing_entity_categories_default_to_empty(self, serializer, analysis):
        """Test that omitted entity categories are empty."""
        data = serializer.to_dict(analysis)
        data["entities"] = {"persons": ["Jane Roe", "Jane Roe", " "]}

        restored = serializer.from_dict(data)

        assert restored.entities == Entities(persons=["Jane Roe"])


class TestComparisonSerializer:
    """Tests for ComparisonSerializer."""

    def test_serialize_comparison(self, analysis):
        """Test that a comparison serializes to plain JSON values."""
        documents = [
            AnalyzedDocument(id="1", name="lease-a", text="Any breach ends this lease.",
                             analysis=analysis),
            AnalyzedDocument(id="2", name="lease-b", text="The lease renews yearly.",
                             analysis=analysis),
        ]
        comparison = ComparisonEngine().compare(documents)

        data = json.loads(ComparisonSerializer().serialize(comparison))

        assert data["documents"][0] == {"id": "1", "name": "lease-a", "type": "Legal Document"}
        assert data["similarities"][0]["common_keywords"] == ["lease"]
        assert data["similarities"][0]["common_entities"]["persons"] == [
            {"entity": "Jane Roe", "count": 2}
        ]
        assert data["risk_comparison"]["common_risks"] == [{"risk": "breach", "count": 2}]
        assert data["risk_comparison"]["risk_trends"][1] == {
            "risk_level": "MEDIUM", "count": 2, "percentage": 100.0
        }
        assert data["summary"]["average_risk_level"] == "MEDIUM"
        assert data["entity_comparison"]["entity_frequency"]["emails"] == {"jane@example.com": 2}
