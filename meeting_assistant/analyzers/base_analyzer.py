"""
Base analyzer class for all meeting analyzers.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from loguru import logger

from meeting_assistant.models import (
    AnalysisContext,
    AnalysisResult,
    AnalyzerStatus,
    Priority,
    StatePatch,
    Suggestion,
    SuggestionType,
    new_id,
)
from meeting_assistant.config import ProcessingConfig, get_config


class BaseAnalyzer(ABC):
    """Abstract base class for all analyzers."""

    def __init__(self, name: str, config: Optional[ProcessingConfig] = None):
        """
        Initialize the base analyzer.

        Args:
            name: Name of the analyzer
            config: Optional processing config; defaults to the global one
        """
        self.name = name
        self.config = config or get_config().processing

    @abstractmethod
    def evaluate(self, context: AnalysisContext) -> Tuple[List[Suggestion], StatePatch]:
        """
        Inspect the snapshot in `context` and return new suggestions plus a patch.

        Implementations must not mutate `context.state`.
        """
        pass

    def analyze(self, context: AnalysisContext) -> AnalysisResult:
        """
        Run the analyzer, capturing timing and any failure.

        Args:
            context: Analysis context

        Returns:
            AnalysisResult object
        """
        start_time = time.time()
        result = AnalysisResult(
            analyzer_name=self.name,
            status=AnalyzerStatus.PROCESSING
        )

        try:
            suggestions, patch = self.evaluate(context)
            result.suggestions = suggestions
            result.patch = patch
            result.status = AnalyzerStatus.COMPLETED
        except Exception as e:
            logger.error(f"Analysis failed for {self.name}: {e}")
            result.status = AnalyzerStatus.ERROR
            result.error_message = str(e)

        result.processing_time = time.time() - start_time
        logger.debug(
            f"{self.name}: {len(result.suggestions)} suggestions in {result.processing_time * 1000:.1f}ms"
        )
        return result

    def suggest(
        self,
        context: AnalysisContext,
        kind: SuggestionType,
        prefix: str,
        title: str,
        message: str,
        priority: Priority,
        **details: Any
    ) -> Suggestion:
        """Build a suggestion stamped with the analysis time."""
        return Suggestion(
            id=new_id(prefix),
            type=kind,
            title=title,
            message=message,
            priority=priority,
            timestamp=context.now,
            details=details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
