"""JSON serialization of analysis and comparison results."""

import json
from typing import Any, Dict, List

from .models.analysis import (
    Analysis,
    Entities,
    Keyword,
    RiskAnalysis,
    RiskDetail,
    Sentiment,
    TermsAndCondition,
)
from .models.comparison import (
    Comparison,
    ComparisonSummary,
    Difference,
    EntityComparison,
    EntityCount,
    RiskComparison,
    RiskCount,
    Similarity,
)
from .models.enums import ENTITY_CATEGORIES, RiskLevel, SentimentLabel


class AnalysisSerializer:
    """
    Converts Analysis records to and from JSON-ready dictionaries.

    Keys are the snake_case attribute names; enums are stored by value.
    """

    def serialize(self, analysis: Analysis) -> str:
        """
        Serialize an Analysis to JSON string.

        Args:
            analysis: The analysis to serialize.

        Returns:
            JSON string representation of the analysis.
        """
        return json.dumps(
            self.to_dict(analysis),
            ensure_ascii=False,
            indent=2
        )

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
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {str(e)}")

        return self.from_dict(data)

    def to_dict(self, analysis: Analysis) -> Dict[str, Any]:
        """Convert Analysis to dictionary."""
        return {
            "summary": analysis.summary,
            "entities": analysis.entities.as_dict(),
            "risks": self._risks_to_dict(analysis.risks),
            "simplified": analysis.simplified,
            "keywords": [{"word": k.word, "score": k.score} for k in analysis.keywords],
            "terms_and_conditions": [
                {"sentence": t.sentence, "position": t.position, "type": t.type}
                for t in analysis.terms_and_conditions
            ],
            "sentiment": {
                "score": analysis.sentiment.score,
                "label": analysis.sentiment.label.value,
                "magnitude": analysis.sentiment.magnitude,
            },
            "document_type": analysis.document_type,
        }

    def from_dict(self, data: Dict[str, Any]) -> Analysis:
        """Convert dictionary to Analysis."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Analysis")

        required_fields = [
            "summary", "entities", "risks", "simplified", "keywords",
            "terms_and_conditions", "sentiment", "document_type"
        ]
        for field in required_fields:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in Analysis")

        return Analysis(
            summary=data["summary"],
            entities=self._dict_to_entities(data["entities"]),
            risks=self._dict_to_risks(data["risks"]),
            simplified=data["simplified"],
            keywords=[self._dict_to_keyword(k) for k in data["keywords"]],
            terms_and_conditions=[
                self._dict_to_term(t) for t in data["terms_and_conditions"]
            ],
            sentiment=self._dict_to_sentiment(data["sentiment"]),
            document_type=data["document_type"],
        )

    def _risks_to_dict(self, risks: RiskAnalysis) -> Dict[str, Any]:
        """Convert RiskAnalysis to dictionary."""
        return {
            "total_risks": risks.total_risks,
            "risk_keywords": list(risks.risk_keywords),
            "risk_details": {
                keyword: [
                    {
                        "keyword": d.keyword,
                        "sentence": d.sentence,
                        "position": d.position,
                        "severity": d.severity.value,
                    }
                    for d in details
                ]
                for keyword, details in risks.risk_details.items()
            },
            "risk_level": risks.risk_level.value,
        }

    def _dict_to_entities(self, data: Dict[str, Any]) -> Entities:
        """Convert dictionary to Entities."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Entities")

        unknown = set(data) - set(ENTITY_CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown entity categories: {sorted(unknown)}")

        return Entities(**{category: list(data.get(category, [])) for category in ENTITY_CATEGORIES})

    def _dict_to_risks(self, data: Dict[str, Any]) -> RiskAnalysis:
        """Convert dictionary to RiskAnalysis."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for RiskAnalysis")

        details: Dict[str, List[RiskDetail]] = {}
        for keyword, items in data.get("risk_details", {}).items():
            details[keyword] = [self._dict_to_risk_detail(d) for d in items]

        try:
            level = RiskLevel(data.get("risk_level", RiskLevel.LOW.value))
        except ValueError as e:
            raise ValueError(f"Invalid risk level: {e}")

        return RiskAnalysis(
            total_risks=data.get("total_risks", sum(len(v) for v in details.values())),
            risk_keywords=list(data.get("risk_keywords", details.keys())),
            risk_details=details,
            risk_level=level,
        )

    def _dict_to_risk_detail(self, data: Dict[str, Any]) -> RiskDetail:
        """Convert dictionary to RiskDetail."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for RiskDetail")

        for field in ["keyword", "sentence", "position", "severity"]:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in RiskDetail")

        try:
            severity = RiskLevel(data["severity"])
        except ValueError as e:
            raise ValueError(f"Invalid risk severity: {e}")

        return RiskDetail(
            keyword=data["keyword"],
            sentence=data["sentence"],
            position=data["position"],
            severity=severity,
        )

    def _dict_to_keyword(self, data: Dict[str, Any]) -> Keyword:
        """Convert dictionary to Keyword."""
        if not isinstance(data, dict) or "word" not in data or "score" not in data:
            raise ValueError("Keyword requires 'word' and 'score'")
        return Keyword(word=data["word"], score=float(data["score"]))

    def _dict_to_term(self, data: Dict[str, Any]) -> TermsAndCondition:
        """Convert dictionary to TermsAndCondition."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for TermsAndCondition")

        for field in ["sentence", "position", "type"]:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in TermsAndCondition")

        return TermsAndCondition(
            sentence=data["sentence"],
            position=data["position"],
            type=data["type"],
        )

    def _dict_to_sentiment(self, data: Dict[str, Any]) -> Sentiment:
        """Convert dictionary to Sentiment."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Sentiment")

        try:
            label = SentimentLabel(data.get("label", SentimentLabel.NEUTRAL.value))
        except ValueError as e:
            raise ValueError(f"Invalid sentiment label: {e}")

        score = float(data.get("score", 0.0))
        return Sentiment(
            score=score,
            label=label,
            magnitude=float(data.get("magnitude", abs(score))),
        )


class ComparisonSerializer:
    """Converts Comparison records to JSON-ready dictionaries."""

    def serialize(self, comparison: Comparison) -> str:
        """Serialize a Comparison to JSON string."""
        return json.dumps(
            self.to_dict(comparison),
            ensure_ascii=False,
            indent=2
        )

    def to_dict(self, comparison: Comparison) -> Dict[str, Any]:
        """Convert Comparison to dictionary."""
        return {
            "documents": [
                {"id": d.id, "name": d.name, "type": d.type}
                for d in comparison.documents
            ],
            "similarities": [self._similarity_to_dict(s) for s in comparison.similarities],
            "differences": [self._difference_to_dict(d) for d in comparison.differences],
            "risk_comparison": self._risk_comparison_to_dict(comparison.risk_comparison),
            "entity_comparison": self._entity_comparison_to_dict(comparison.entity_comparison),
            "summary": self._summary_to_dict(comparison.summary),
        }

    def _similarity_to_dict(self, similarity: Similarity) -> Dict[str, Any]:
        return {
            "doc1": similarity.doc1,
            "doc2": similarity.doc2,
            "similarity_score": similarity.similarity_score,
            "common_keywords": list(similarity.common_keywords),
            "common_entities": _entity_counts_to_dict(similarity.common_entities),
        }

    def _difference_to_dict(self, difference: Difference) -> Dict[str, Any]:
        return {
            "doc1": difference.doc1,
            "doc2": difference.doc2,
            "unique_keywords1": list(difference.unique_keywords1),
            "unique_keywords2": list(difference.unique_keywords2),
            "unique_entities1": {k: list(v) for k, v in difference.unique_entities1.items()},
            "unique_entities2": {k: list(v) for k, v in difference.unique_entities2.items()},
            "structural_differences": list(difference.structural_differences),
        }

    def _risk_comparison_to_dict(self, risk_comparison: RiskComparison) -> Dict[str, Any]:
        return {
            "overall_risk_levels": [
                {
                    "name": r.name,
                    "risk_level": r.risk_level.value,
                    "total_risks": r.total_risks,
                }
                for r in risk_comparison.overall_risk_levels
            ],
            "common_risks": _risk_counts_to_list(risk_comparison.common_risks),
            "unique_risks": {k: list(v) for k, v in risk_comparison.unique_risks.items()},
            "risk_trends": [
                {
                    "risk_level": t.risk_level.value,
                    "count": t.count,
                    "percentage": t.percentage,
                }
                for t in risk_comparison.risk_trends
            ],
        }

    def _entity_comparison_to_dict(self, entity_comparison: EntityComparison) -> Dict[str, Any]:
        return {
            "common_entities": _entity_counts_to_dict(entity_comparison.common_entities),
            "unique_entities": {
                name: {category: list(values) for category, values in categories.items()}
                for name, categories in entity_comparison.unique_entities.items()
            },
            "entity_frequency": {
                category: dict(counts)
                for category, counts in entity_comparison.entity_frequency.items()
            },
        }

    def _summary_to_dict(self, summary: ComparisonSummary) -> Dict[str, Any]:
        return {
            "total_documents": summary.total_documents,
            "average_risk_level": summary.average_risk_level.value,
            "most_common_risks": _risk_counts_to_list(summary.most_common_risks),
            "document_types": dict(summary.document_types),
            "key_insights": list(summary.key_insights),
        }


def _entity_counts_to_dict(counts: Dict[str, List[EntityCount]]) -> Dict[str, List[Dict[str, Any]]]:
    return {
        category: [{"entity": c.entity, "count": c.count} for c in items]
        for category, items in counts.items()
    }


def _risk_counts_to_list(counts: List[RiskCount]) -> List[Dict[str, Any]]:
    return [{"risk": c.risk, "count": c.count} for c in counts]
