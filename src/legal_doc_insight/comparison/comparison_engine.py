"""Comparison Engine implementation for the Legal Document Insight system.

This module implements the IDocumentComparator interface. It compares two
or more analyzed documents pairwise (vocabulary overlap, entity overlap,
structure) and in aggregate (risk keywords, risk levels, entities and
document types).
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..exceptions import ComparisonPipelineError, ComparisonValidationError
from ..interfaces.comparator import IDocumentComparator
from ..models.comparison import (
    AnalyzedDocument,
    Comparison,
    ComparisonSummary,
    Difference,
    DocumentReference,
    EntityComparison,
    RiskComparison,
    Similarity,
)
from ..models.enums import RiskLevel
from ..stages import StageFailure, run_stage
from . import aggregates
from .similarity import (
    common_keywords,
    common_pair_entities,
    frequency_map,
    jaccard_similarity,
    structural_differences,
    unique_keywords,
    unique_pair_entities,
)


logger = logging.getLogger(__name__)

MIN_DOCUMENTS = 2
FALLBACK_INSIGHT = "Analysis completed successfully"


@dataclass
class ComparisonOutcome:
    """A comparison together with the stages that fell back to defaults."""
    comparison: Comparison
    stage_failures: List[StageFailure] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.stage_failures)


class ComparisonEngine(IDocumentComparator):
    """
    Multi-document comparison engine.

    Entities are read from each document's stored analysis rather than
    extracted again. Every part of the comparison is computed on its own;
    a part that fails is replaced by an empty value and logged, so only
    invalid input makes ``compare`` raise. The engine keeps no state
    between calls.
    """

    def compare(self, documents: Sequence[AnalyzedDocument]) -> Comparison:
        """
        Compare two or more analyzed documents.

        Args:
            documents: Documents with their text and stored analysis.

        Returns:
            Comparison of the documents.

        Raises:
            ComparisonValidationError: If fewer than two documents are given.
            ComparisonPipelineError: If the comparison cannot be assembled.
        """
        return self.compare_detailed(documents).comparison

    def compare_detailed(self, documents: Sequence[AnalyzedDocument]) -> ComparisonOutcome:
        """Compare documents and report which parts fell back to defaults."""
        documents = list(documents or [])
        if len(documents) < MIN_DOCUMENTS:
            raise ComparisonValidationError(
                message="At least 2 documents are required for comparison",
                stage="compare",
                details={"document_count": len(documents), "minimum": MIN_DOCUMENTS},
            )

        failures: List[StageFailure] = []
        try:
            comparison = Comparison(
                documents=[
                    DocumentReference(id=doc.id, name=doc.name, type=doc.analysis.document_type)
                    for doc in documents
                ],
                similarities=run_stage(
                    "similarities",
                    functools.partial(self.find_similarities, documents, failures),
                    list,
                    failures,
                ),
                differences=run_stage(
                    "differences",
                    functools.partial(self.find_differences, documents, failures),
                    list,
                    failures,
                ),
                risk_comparison=run_stage(
                    "risk_comparison",
                    functools.partial(self.compare_risks, documents),
                    RiskComparison,
                    failures,
                ),
                entity_comparison=run_stage(
                    "entity_comparison",
                    functools.partial(self.compare_entities, documents),
                    EntityComparison,
                    failures,
                ),
                summary=run_stage(
                    "summary",
                    functools.partial(self.summarize, documents, failures),
                    functools.partial(_default_summary, len(documents)),
                    failures,
                ),
            )
        except Exception as e:
            logger.exception("Document comparison failed")
            raise ComparisonPipelineError(
                message=f"Comparison failed: {e}",
                stage="compare",
                details={"document_count": len(documents)},
            ) from e

        logger.info(
            f"Compared {len(documents)} documents "
            f"({len(comparison.similarities)} pairs, {len(failures)} degraded stages)"
        )
        return ComparisonOutcome(comparison=comparison, stage_failures=failures)

    # =========================================================================
    # Pairwise comparison
    # =========================================================================

    def find_similarities(
        self,
        documents: Sequence[AnalyzedDocument],
        failures: Optional[List[StageFailure]] = None,
    ) -> List[Similarity]:
        """Compute the similarity of every unordered document pair."""
        similarities: List[Similarity] = []
        for i in range(len(documents)):
            for j in range(i + 1, len(documents)):
                doc1, doc2 = documents[i], documents[j]
                similarities.append(
                    run_stage(
                        f"similarity[{i},{j}]",
                        functools.partial(self.calculate_similarity, doc1, doc2),
                        functools.partial(
                            Similarity, doc1=doc1.name, doc2=doc2.name, similarity_score=0.0
                        ),
                        failures,
                    )
                )
        return similarities

    def calculate_similarity(self, doc1: AnalyzedDocument, doc2: AnalyzedDocument) -> Similarity:
        freq1 = frequency_map(doc1.text)
        freq2 = frequency_map(doc2.text)
        return Similarity(
            doc1=doc1.name,
            doc2=doc2.name,
            similarity_score=jaccard_similarity(freq1, freq2),
            common_keywords=common_keywords(freq1, freq2),
            common_entities=common_pair_entities(doc1.analysis.entities, doc2.analysis.entities),
        )

    def find_differences(
        self,
        documents: Sequence[AnalyzedDocument],
        failures: Optional[List[StageFailure]] = None,
    ) -> List[Difference]:
        """Compute the differences of every unordered document pair."""
        differences: List[Difference] = []
        for i in range(len(documents)):
            for j in range(i + 1, len(documents)):
                doc1, doc2 = documents[i], documents[j]
                differences.append(
                    run_stage(
                        f"difference[{i},{j}]",
                        functools.partial(self.calculate_differences, doc1, doc2),
                        functools.partial(Difference, doc1=doc1.name, doc2=doc2.name),
                        failures,
                    )
                )
        return differences

    def calculate_differences(self, doc1: AnalyzedDocument, doc2: AnalyzedDocument) -> Difference:
        freq1 = frequency_map(doc1.text)
        freq2 = frequency_map(doc2.text)
        entities1 = doc1.analysis.entities
        entities2 = doc2.analysis.entities
        return Difference(
            doc1=doc1.name,
            doc2=doc2.name,
            unique_keywords1=unique_keywords(freq1, freq2),
            unique_keywords2=unique_keywords(freq2, freq1),
            unique_entities1=unique_pair_entities(entities1, entities2),
            unique_entities2=unique_pair_entities(entities2, entities1),
            structural_differences=structural_differences(doc1.text, doc2.text),
        )

    # =========================================================================
    # Aggregate comparison
    # =========================================================================

    def compare_risks(self, documents: Sequence[AnalyzedDocument]) -> RiskComparison:
        return RiskComparison(
            overall_risk_levels=aggregates.overall_risk_levels(documents),
            common_risks=aggregates.common_risks(documents),
            unique_risks=aggregates.unique_risks(documents),
            risk_trends=aggregates.risk_trends(documents),
        )

    def compare_entities(self, documents: Sequence[AnalyzedDocument]) -> EntityComparison:
        return EntityComparison(
            common_entities=aggregates.common_entities(documents),
            unique_entities=aggregates.unique_entities(documents),
            entity_frequency=aggregates.entity_frequency(documents),
        )

    def summarize(
        self,
        documents: Sequence[AnalyzedDocument],
        failures: Optional[List[StageFailure]] = None,
    ) -> ComparisonSummary:
        """Build the headline summary; each figure degrades on its own."""
        return ComparisonSummary(
            total_documents=len(documents),
            average_risk_level=run_stage(
                "summary.average_risk_level",
                functools.partial(aggregates.average_risk_level, documents),
                lambda: RiskLevel.MEDIUM,
                failures,
            ),
            most_common_risks=run_stage(
                "summary.most_common_risks",
                lambda: aggregates.common_risks(documents)[:aggregates.MOST_COMMON_RISK_LIMIT],
                list,
                failures,
            ),
            document_types=run_stage(
                "summary.document_types",
                functools.partial(aggregates.document_types, documents),
                dict,
                failures,
            ),
            key_insights=run_stage(
                "summary.key_insights",
                functools.partial(aggregates.key_insights, documents),
                lambda: [FALLBACK_INSIGHT],
                failures,
            ),
        )


def _default_summary(total_documents: int) -> ComparisonSummary:
    return ComparisonSummary(
        total_documents=total_documents,
        average_risk_level=RiskLevel.MEDIUM,
        key_insights=[FALLBACK_INSIGHT],
    )
