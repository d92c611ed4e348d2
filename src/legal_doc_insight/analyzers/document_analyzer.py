"""Document Analyzer implementation for the Legal Document Insight system.

This module implements the IDocumentAnalyzer interface. It runs the eight
independent sub-analyses over a document's text and assembles them into an
Analysis. A sub-analysis that raises is replaced by its default value, so
analyzing degenerate text never fails.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..config.defaults import default_configuration
from ..config.models import VocabularyConfiguration
from ..exceptions import AnalysisPipelineError, UnsupportedAnalysisTypeError
from ..interfaces.analyzer import IDocumentAnalyzer
from ..models.analysis import Analysis, Entities, RiskAnalysis, Sentiment
from ..models.enums import AnalysisType
from ..serialization import AnalysisSerializer
from ..stages import StageFailure, run_stage
from .classifier import DocumentClassifier
from .entity_extractor import DEFAULT_MODEL, EntityExtractor
from .keyword_extractor import KeywordExtractor
from .risk_analyzer import RiskAnalyzer
from .sentiment import SentimentAnalyzer
from .simplifier import TextSimplifier
from .summarizer import FAILED_SUMMARY, Summarizer
from .terms_extractor import TermsExtractor


logger = logging.getLogger(__name__)

# Analysis attribute holding each sub-analysis.
ANALYSIS_FIELDS: Dict[AnalysisType, str] = {
    AnalysisType.SUMMARY: "summary",
    AnalysisType.ENTITIES: "entities",
    AnalysisType.RISK: "risks",
    AnalysisType.SIMPLIFIED: "simplified",
    AnalysisType.KEYWORDS: "keywords",
    AnalysisType.TERMS: "terms_and_conditions",
    AnalysisType.SENTIMENT: "sentiment",
    AnalysisType.DOCUMENT_TYPE: "document_type",
}


@dataclass
class AnalysisOutcome:
    """An analysis together with the stages that fell back to defaults."""
    analysis: Analysis
    stage_failures: List[StageFailure] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.stage_failures)


def resolve_analysis_type(value: Union[str, AnalysisType]) -> AnalysisType:
    """
    Convert a name such as ``"risk"`` to an AnalysisType.

    Raises:
        UnsupportedAnalysisTypeError: If the name is not a known type.
    """
    if isinstance(value, AnalysisType):
        return value
    try:
        return AnalysisType(value)
    except ValueError:
        raise UnsupportedAnalysisTypeError(
            message=f"Invalid analysis type: {value}",
            stage="reanalyze",
            details={
                "analysis_type": value,
                "supported_types": [t.value for t in AnalysisType],
            },
        )


class DocumentAnalyzer(IDocumentAnalyzer):
    """
    Heuristic legal document analyzer.

    Combines frequency-based summarization, spaCy entity extraction,
    keyword risk detection, phrase simplification, TF-IDF keywords,
    terms-and-conditions detection, lexicon sentiment and cascade
    classification. The vocabulary tables come from a
    VocabularyConfiguration.
    """

    def __init__(
        self,
        config: Optional[VocabularyConfiguration] = None,
        summary_max_length: int = 500,
        max_summary_sentences: int = 8,
        keyword_limit: int = 20,
        entity_model_name: str = DEFAULT_MODEL,
        entity_extractor: Optional[EntityExtractor] = None,
        sentiment_analyzer: Optional[SentimentAnalyzer] = None,
    ):
        """
        Initialize the document analyzer.

        Args:
            config: Vocabulary configuration. Defaults to the built-in tables.
            summary_max_length: Default summary length limit in characters.
            max_summary_sentences: Maximum number of summary sentences.
            keyword_limit: Default number of keywords.
            entity_model_name: spaCy model used for entity extraction.
            entity_extractor: Optional entity extractor (created if not provided).
            sentiment_analyzer: Optional sentiment analyzer (created if not provided).
        """
        self._summary_max_length = summary_max_length
        self._max_summary_sentences = max_summary_sentences
        self._serializer = AnalysisSerializer()

        self._entity_extractor = entity_extractor or EntityExtractor(model_name=entity_model_name)
        self._keyword_extractor = KeywordExtractor(top_n=keyword_limit)
        self._sentiment_analyzer = sentiment_analyzer or SentimentAnalyzer()
        self.configure(config or default_configuration())

    def configure(self, config: VocabularyConfiguration) -> None:
        """
        Rebuild the sub-analyzers that read vocabulary tables.

        The entity extractor, keyword extractor and sentiment analyzer do
        not depend on the tables and are kept.
        """
        self._classification_default = config.classification_default
        self._summarizer = Summarizer(
            legal_terms=config.legal_terms,
            max_sentences=self._max_summary_sentences,
        )
        self._risk_analyzer = RiskAnalyzer(risk_keywords=config.risk_keywords)
        self._simplifier = TextSimplifier(rules=config.simplifications)
        self._terms_extractor = TermsExtractor(
            triggers=config.term_triggers,
            category_rules=config.get_term_category_rules(),
            default_category=config.term_category_default,
        )
        self._classifier = DocumentClassifier(
            rules=config.get_classification_rules(),
            default_label=config.classification_default,
        )

    def analyze(self, text: str) -> Analysis:
        """
        Analyze a document's text.

        Args:
            text: Extracted document text. May be empty.

        Returns:
            Analysis of the text. Failed sub-analyses hold their defaults.

        Raises:
            AnalysisPipelineError: If ``text`` is not a string.
        """
        return self.analyze_detailed(text).analysis

    def analyze_detailed(self, text: str) -> AnalysisOutcome:
        """Analyze text and report which sub-analyses fell back to defaults."""
        self._check_text(text)

        failures: List[StageFailure] = []
        values: Dict[str, Any] = {}
        for analysis_type in AnalysisType:
            values[ANALYSIS_FIELDS[analysis_type]] = self.run_analysis(
                analysis_type, text, failures=failures
            )

        if failures:
            logger.warning(
                f"Analysis completed with {len(failures)} degraded stage(s): "
                f"{', '.join(f.stage for f in failures)}"
            )

        return AnalysisOutcome(analysis=Analysis(**values), stage_failures=failures)

    def run_analysis(
        self,
        analysis_type: Union[str, AnalysisType],
        text: str,
        failures: Optional[List[StageFailure]] = None,
        **parameters: Any,
    ) -> Any:
        """
        Run a single sub-analysis.

        Args:
            analysis_type: Which sub-analysis to run.
            text: Document text.
            failures: Optional list collecting stage failures.
            **parameters: ``max_length`` for summaries, ``top_n`` for
                keywords. Other parameters are ignored.

        Returns:
            The sub-analysis result, or its default if it failed.

        Raises:
            UnsupportedAnalysisTypeError: If the analysis type is unknown.
        """
        analysis_type = resolve_analysis_type(analysis_type)
        self._check_text(text)

        func, default = self._stage(analysis_type, text, failures, parameters)
        return run_stage(analysis_type.value, func, default, failures)

    def _stage(
        self,
        analysis_type: AnalysisType,
        text: str,
        failures: Optional[List[StageFailure]],
        parameters: Dict[str, Any],
    ) -> Tuple[Callable[[], Any], Callable[[], Any]]:
        """Get the (compute, default) pair of a sub-analysis."""
        if analysis_type == AnalysisType.SUMMARY:
            max_length = parameters.get("max_length", self._summary_max_length)
            return (
                lambda: self._summarizer.summarize(text, max_length=max_length),
                lambda: FAILED_SUMMARY,
            )
        if analysis_type == AnalysisType.ENTITIES:
            return lambda: self._entity_extractor.extract(text, failures), Entities
        if analysis_type == AnalysisType.RISK:
            return lambda: self._risk_analyzer.analyze(text), RiskAnalysis
        if analysis_type == AnalysisType.SIMPLIFIED:
            return lambda: self._simplifier.simplify(text), lambda: text
        if analysis_type == AnalysisType.KEYWORDS:
            top_n = parameters.get("top_n")
            return lambda: self._keyword_extractor.extract(text, top_n=top_n), list
        if analysis_type == AnalysisType.TERMS:
            return lambda: self._terms_extractor.extract(text), list
        if analysis_type == AnalysisType.SENTIMENT:
            return lambda: self._sentiment_analyzer.analyze(text), Sentiment
        return (
            lambda: self._classifier.classify(text),
            lambda: self._classification_default,
        )

    @staticmethod
    def _check_text(text: Any) -> None:
        if not isinstance(text, str):
            raise AnalysisPipelineError(
                message=f"Analysis failed: expected text, got {type(text).__name__}",
                stage="analyze",
            )

    def serialize(self, analysis: Analysis) -> str:
        """Serialize an Analysis to JSON string."""
        return self._serializer.serialize(analysis)

    def deserialize(self, json_str: str) -> Analysis:
        """
        Deserialize a JSON string to an Analysis.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        return self._serializer.deserialize(json_str)
