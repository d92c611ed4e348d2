"""End-to-end processing pipeline for the Legal Document Insight system.

This module provides the facade used by the API layer: it wires the
vocabulary configuration, the document analyzer and the comparison engine
together and adds batch handling, targeted re-analysis, error capture,
execution statistics and performance tracking.
"""

import dataclasses
import logging
import time
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterable, List, Optional, Tuple, Union

from .analyzers.document_analyzer import (
    ANALYSIS_FIELDS,
    AnalysisOutcome,
    DocumentAnalyzer,
    resolve_analysis_type,
)
from .comparison.comparison_engine import ComparisonEngine
from .config.config_manager import ConfigurationManager
from .config.models import ConfigurationError, ValidationResult
from .exceptions import AnalysisPipelineError, ComparisonPipelineError, LegalAnalysisError
from .interfaces.analyzer import IDocumentAnalyzer
from .interfaces.comparator import IDocumentComparator
from .models.analysis import Analysis
from .models.comparison import AnalyzedDocument, Comparison
from .models.enums import AnalysisType
from .performance import OperationMetric, PerformanceMonitor


logger = logging.getLogger(__name__)

EMPTY_TEXT_ERROR = "Could not extract text from document"


@dataclass
class PipelineConfig:
    """Configuration for the processing pipeline."""

    # Directory with vocabulary JSON files
    config_dir: Optional[str] = None

    # Analysis configuration
    summary_max_length: int = 500
    max_summary_sentences: int = 8
    keyword_limit: int = 20
    entity_model_name: str = "en_core_web_sm"

    # Performance configuration
    max_processing_time: int = 60  # seconds
    enable_performance_monitoring: bool = True


@dataclass
class PipelineResult:
    """Result of analyzing one document."""

    success: bool
    analysis: Optional[Analysis] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BatchItemResult:
    """Outcome of one document of a batch."""

    name: str
    success: bool
    analysis: Optional[Analysis] = None
    error: Optional[str] = None


@dataclass
class PipelineStats:
    """Statistics about document analyses run through the pipeline."""

    total_executions: int = 0
    successful_executions: int = 0
    failed_executions: int = 0
    average_processing_time: float = 0.0
    total_processing_time: float = 0.0


class LegalAnalysisPipeline:
    """
    Main processing pipeline for legal document analysis.

    Analyzes single documents and batches, regenerates parts of an
    analysis and compares analyzed documents, with logging, error
    capture and timing.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        analyzer: Optional[IDocumentAnalyzer] = None,
        comparator: Optional[IDocumentComparator] = None,
        config_manager: Optional[ConfigurationManager] = None,
    ):
        """
        Initialize the processing pipeline.

        Args:
            config: Pipeline configuration.
            analyzer: Optional document analyzer (created if not provided).
            comparator: Optional comparison engine (created if not provided).
            config_manager: Optional configuration manager (created if not provided).
        """
        self.config = config or PipelineConfig()
        self.stats = PipelineStats()

        self.performance_monitor = PerformanceMonitor(
            max_processing_time=self.config.max_processing_time
        )

        self._config_manager = config_manager or ConfigurationManager(
            config_dir=self.config.config_dir
        )

        if self.config.config_dir:
            self._load_configuration(self.config.config_dir)

        self._analyzer = analyzer or DocumentAnalyzer(
            config=self._config_manager.configuration,
            summary_max_length=self.config.summary_max_length,
            max_summary_sentences=self.config.max_summary_sentences,
            keyword_limit=self.config.keyword_limit,
            entity_model_name=self.config.entity_model_name,
        )
        self._comparator = comparator or ComparisonEngine()

        logger.info("Processing pipeline initialized")

    @property
    def config_manager(self) -> ConfigurationManager:
        """
        Vocabulary configuration of the pipeline.

        The analyzer reads the tables when it is built; call
        ``reload_configuration`` after changing them here.
        """
        return self._config_manager

    @property
    def analyzer(self) -> IDocumentAnalyzer:
        return self._analyzer

    # =========================================================================
    # Configuration
    # =========================================================================

    def _load_configuration(self, config_dir: Union[str, Path]) -> Optional[ValidationResult]:
        try:
            result = self._config_manager.load_from_directory(config_dir)
        except (ConfigurationError, OSError) as e:
            logger.warning(f"Failed to load configuration: {e}")
            return None

        for warning in result.warnings:
            logger.warning(f"Configuration warning: {warning}")
        if result.is_valid:
            logger.info(f"Loaded configuration from {config_dir}")
        else:
            logger.warning(
                f"Invalid configuration in {config_dir}, "
                f"affected tables keep their defaults: {'; '.join(result.errors)}"
            )
        return result

    def reload_configuration(
        self,
        config_dir: Optional[Union[str, Path]] = None,
    ) -> Optional[ValidationResult]:
        """
        Apply the current vocabulary configuration to the analyzer.

        Args:
            config_dir: Optional directory to load configuration files from
                first. Without it, tables changed through ``config_manager``
                are applied as they are.

        Returns:
            ValidationResult of the directory load, or None when no
            directory was given or it could not be read.
        """
        result = self._load_configuration(config_dir) if config_dir else None

        if isinstance(self._analyzer, DocumentAnalyzer):
            self._analyzer.configure(self._config_manager.configuration)
            logger.info("Analyzer reconfigured")
        else:
            logger.warning(
                f"{type(self._analyzer).__name__} does not support reconfiguration; "
                "vocabulary changes are not applied"
            )
        return result

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze(self, text: str, name: Optional[str] = None) -> PipelineResult:
        """
        Analyze one document's text.

        Degraded sub-analyses are reported as warnings; the result is still
        successful.

        Args:
            text: Extracted document text.
            name: Optional document name used in logs and metadata.

        Returns:
            PipelineResult containing the analysis and metadata.
        """
        start_time = time.time()
        result = PipelineResult(success=False, metadata={"name": name})
        metric = self._start_operation("analyze_document", name=name)

        try:
            logger.info(f"Starting analysis of {name or 'unnamed document'}")

            outcome = self._run_analysis(text)
            result.analysis = outcome.analysis
            result.warnings.extend(str(failure) for failure in outcome.stage_failures)
            result.metadata["stage_failures"] = [f.to_dict() for f in outcome.stage_failures]
            result.metadata["text_length"] = len(text)
            result.success = True

            self._end_operation(metric, success=True)
            logger.info(
                f"Analysis of {name or 'unnamed document'} completed: "
                f"{outcome.analysis.document_type}, risk {outcome.analysis.risks.risk_level.value}"
            )

        except AnalysisPipelineError as e:
            result.errors.append(e.message)
            logger.error(e.message)
            self._end_operation(metric, success=False, error=e.message)

        except Exception as e:
            error_msg = f"Analysis failed: {str(e)}"
            result.errors.append(error_msg)
            logger.exception(error_msg)
            self._end_operation(metric, success=False, error=error_msg)

        finally:
            result.processing_time = time.time() - start_time
            if result.processing_time > self.config.max_processing_time:
                warning = (
                    f"Processing time ({result.processing_time:.2f}s) exceeded "
                    f"target ({self.config.max_processing_time}s)"
                )
                result.warnings.append(warning)
                logger.warning(warning)
            self._update_stats(result)

        return result

    def _run_analysis(self, text: str) -> AnalysisOutcome:
        if isinstance(self._analyzer, DocumentAnalyzer):
            return self._analyzer.analyze_detailed(text)
        return AnalysisOutcome(analysis=self._analyzer.analyze(text))

    def analyze_batch(self, items: Iterable[Tuple[str, str]]) -> List[BatchItemResult]:
        """
        Analyze several documents independently.

        A document without text, or one whose analysis fails, produces a
        failed item; the remaining documents are still analyzed.

        Args:
            items: ``(name, text)`` pairs.

        Returns:
            One BatchItemResult per item, in input order.
        """
        results: List[BatchItemResult] = []

        for name, text in items:
            if not isinstance(text, str) or not text.strip():
                logger.warning(f"{name}: {EMPTY_TEXT_ERROR}")
                results.append(BatchItemResult(name=name, success=False, error=EMPTY_TEXT_ERROR))
                continue

            result = self.analyze(text, name=name)
            results.append(
                BatchItemResult(
                    name=name,
                    success=result.success,
                    analysis=result.analysis,
                    error="; ".join(result.errors) or None,
                )
            )

        succeeded = sum(1 for r in results if r.success)
        logger.info(f"Batch analysis finished: {succeeded}/{len(results)} documents analyzed")
        return results

    # =========================================================================
    # Re-analysis
    # =========================================================================

    def reanalyze(
        self,
        text: str,
        analysis_type: Union[str, AnalysisType],
        **parameters: Any,
    ) -> Any:
        """
        Regenerate one part of a document's analysis.

        Args:
            text: Document text.
            analysis_type: Part to regenerate (e.g. ``"summary"``, ``"risk"``).
            **parameters: ``max_length`` for summaries, ``top_n`` for keywords.

        Returns:
            The regenerated value (summary string, RiskAnalysis, Entities, ...).

        Raises:
            UnsupportedAnalysisTypeError: If the analysis type is unknown.
            AnalysisPipelineError: If the text is not a string.
        """
        analysis_type = resolve_analysis_type(analysis_type)

        with self._track("reanalyze_document", analysis_type=analysis_type.value):
            try:
                if isinstance(self._analyzer, DocumentAnalyzer):
                    value = self._analyzer.run_analysis(analysis_type, text, **parameters)
                else:
                    value = getattr(self._analyzer.analyze(text), ANALYSIS_FIELDS[analysis_type])
            except LegalAnalysisError as e:
                logger.error(f"Re-analysis ({analysis_type.value}) failed: {e}")
                raise

        logger.info(f"Re-analysis ({analysis_type.value}) completed")
        return value

    def reanalyze_document(
        self,
        analysis: Analysis,
        text: str,
        analysis_type: Union[str, AnalysisType],
        **parameters: Any,
    ) -> Analysis:
        """Return a copy of ``analysis`` with one part regenerated from ``text``."""
        analysis_type = resolve_analysis_type(analysis_type)
        value = self.reanalyze(text, analysis_type, **parameters)
        return dataclasses.replace(analysis, **{ANALYSIS_FIELDS[analysis_type]: value})

    # =========================================================================
    # Comparison
    # =========================================================================

    def compare(self, documents: Iterable[AnalyzedDocument]) -> Comparison:
        """
        Compare two or more analyzed documents.

        Raises:
            ComparisonValidationError: If fewer than two documents are given.
            ComparisonPipelineError: If the comparison fails as a whole.
        """
        documents = list(documents or [])

        with self._track("compare_documents", document_count=len(documents)):
            try:
                return self._comparator.compare(documents)
            except LegalAnalysisError as e:
                logger.error(f"Document comparison rejected: {e}")
                raise
            except Exception as e:
                error_msg = f"Comparison failed: {str(e)}"
                logger.exception(error_msg)
                raise ComparisonPipelineError(message=error_msg, stage="compare") from e

    # =========================================================================
    # Statistics
    # =========================================================================

    def _track(self, operation: str, **metadata) -> ContextManager[Optional[OperationMetric]]:
        if not self.config.enable_performance_monitoring:
            return nullcontext()
        return self.performance_monitor.track(operation, **metadata)

    def _start_operation(self, operation: str, **metadata) -> Optional[OperationMetric]:
        if not self.config.enable_performance_monitoring:
            return None
        return self.performance_monitor.start(operation, **metadata)

    def _end_operation(
        self,
        metric: Optional[OperationMetric],
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        if metric is not None:
            self.performance_monitor.finish(metric, success=success, error=error)

    def _update_stats(self, result: PipelineResult) -> None:
        """Update pipeline statistics."""
        self.stats.total_executions += 1

        if result.success:
            self.stats.successful_executions += 1
        else:
            self.stats.failed_executions += 1

        self.stats.total_processing_time += result.processing_time
        self.stats.average_processing_time = (
            self.stats.total_processing_time / self.stats.total_executions
        )

    def get_stats(self) -> PipelineStats:
        """Get document analysis statistics."""
        return self.stats

    def get_performance_stats(self) -> Dict[str, Dict[str, Any]]:
        """
        Get detailed performance statistics for all operations.

        Returns:
            Dictionary with performance metrics for each operation.
        """
        return self.performance_monitor.get_all_stats()
