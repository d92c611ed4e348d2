"""Risk, entity and summary aggregation across many documents."""

from collections import Counter
from typing import Dict, List, Sequence

from ..models.comparison import (
    AnalyzedDocument,
    DocumentRiskLevel,
    EntityCount,
    RiskCount,
    RiskTrend,
)
from ..models.enums import ENTITY_CATEGORIES, RiskLevel


MOST_COMMON_RISK_LIMIT = 5
INSIGHT_RISK_LIMIT = 3


def overall_risk_levels(documents: Sequence[AnalyzedDocument]) -> List[DocumentRiskLevel]:
    return [
        DocumentRiskLevel(
            name=doc.name,
            risk_level=doc.analysis.risks.risk_level,
            total_risks=doc.analysis.risks.total_risks,
        )
        for doc in documents
    ]


def common_risks(documents: Sequence[AnalyzedDocument]) -> List[RiskCount]:
    """Risk keywords found in more than one document, most widespread first."""
    counts = Counter(
        keyword
        for doc in documents
        for keyword in dict.fromkeys(doc.analysis.risks.risk_keywords)
    )
    common = [RiskCount(risk=risk, count=count) for risk, count in counts.items() if count > 1]
    return sorted(common, key=lambda item: item.count, reverse=True)


def unique_risks(documents: Sequence[AnalyzedDocument]) -> Dict[str, List[str]]:
    """Per document name, the risk keywords no other document has."""
    unique: Dict[str, List[str]] = {}
    for index, doc in enumerate(documents):
        others = {
            keyword
            for other_index, other in enumerate(documents)
            if other_index != index
            for keyword in other.analysis.risks.risk_keywords
        }
        unique[doc.name] = [k for k in doc.analysis.risks.risk_keywords if k not in others]
    return unique


def risk_trends(documents: Sequence[AnalyzedDocument]) -> List[RiskTrend]:
    """Number and percentage of documents at each risk level."""
    total = len(documents)
    trends: List[RiskTrend] = []
    for level in RiskLevel:
        count = sum(1 for doc in documents if doc.analysis.risks.risk_level == level)
        trends.append(
            RiskTrend(risk_level=level, count=count, percentage=count / total * 100)
        )
    return trends


def entity_frequency(documents: Sequence[AnalyzedDocument]) -> Dict[str, Dict[str, int]]:
    """Per category, the number of documents each entity appears in."""
    frequency: Dict[str, Dict[str, int]] = {category: {} for category in ENTITY_CATEGORIES}
    for doc in documents:
        for category, values in doc.analysis.entities.as_dict().items():
            for entity in values:
                frequency[category][entity] = frequency[category].get(entity, 0) + 1
    return frequency


def common_entities(documents: Sequence[AnalyzedDocument]) -> Dict[str, List[EntityCount]]:
    """Per category, entities shared by more than one document, most widespread first."""
    common: Dict[str, List[EntityCount]] = {}
    for category, counts in entity_frequency(documents).items():
        shared = [EntityCount(entity=e, count=c) for e, c in counts.items() if c > 1]
        common[category] = sorted(shared, key=lambda item: item.count, reverse=True)
    return common


def unique_entities(documents: Sequence[AnalyzedDocument]) -> Dict[str, Dict[str, List[str]]]:
    """Per document name and category, entities no other document has."""
    unique: Dict[str, Dict[str, List[str]]] = {}
    for index, doc in enumerate(documents):
        others = [
            other.analysis.entities
            for other_index, other in enumerate(documents)
            if other_index != index
        ]
        unique[doc.name] = {}
        for category in ENTITY_CATEGORIES:
            seen = {entity for entities in others for entity in entities.get(category)}
            unique[doc.name][category] = [
                entity for entity in doc.analysis.entities.get(category) if entity not in seen
            ]
    return unique


def average_risk_level(documents: Sequence[AnalyzedDocument]) -> RiskLevel:
    """Bucket the mean of LOW=1, MEDIUM=2, HIGH=3 back into a level."""
    average = sum(doc.analysis.risks.risk_level.score for doc in documents) / len(documents)
    if average <= 1.5:
        return RiskLevel.LOW
    if average <= 2.5:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def document_types(documents: Sequence[AnalyzedDocument]) -> Dict[str, int]:
    return dict(Counter(doc.analysis.document_type for doc in documents))


def key_insights(documents: Sequence[AnalyzedDocument]) -> List[str]:
    """Headline findings in a fixed order: high risk, common risks, dominant type."""
    insights: List[str] = []

    high_risk = sum(1 for doc in documents if doc.analysis.risks.risk_level == RiskLevel.HIGH)
    if high_risk > 0:
        insights.append(
            f"{high_risk} document(s) have high risk levels and require immediate attention"
        )

    risks = common_risks(documents)
    if risks:
        names = ", ".join(r.risk for r in risks[:INSIGHT_RISK_LIMIT])
        insights.append(f"Most common risk keywords: {names}")

    types = sorted(document_types(documents).items(), key=lambda item: item[1], reverse=True)
    if types:
        label, count = types[0]
        insights.append(f"Most common document type: {label} ({count} documents)")

    return insights
