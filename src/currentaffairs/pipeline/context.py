"""Per-run aggregation state.

Pipeline stages never share mutable globals: each source task returns a
``SourceResult`` and the orchestrator folds them into a new
``AggregationContext`` value.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Tuple

from currentaffairs.core.article import Article, DateRange
from currentaffairs.core.enums import Degradation


@dataclass(frozen=True)
class SourceFailure:
    """One (source, window) slot that produced nothing because of an error."""

    source_id: str
    window: str
    reason: str


@dataclass(frozen=True)
class SourceResult:
    """Everything one source contributed to a run."""

    source_id: str
    articles: Tuple[Article, ...] = ()
    failures: Tuple[SourceFailure, ...] = ()
    empty_windows: Tuple[str, ...] = ()
    degraded_classifications: int = 0


@dataclass(frozen=True)
class AggregationContext:
    """Immutable accumulator threaded through one pipeline run."""

    requested_dates: Tuple[date, ...]
    category: Optional[str] = None
    date_range: Optional[DateRange] = None
    articles: Tuple[Article, ...] = ()
    failures: Tuple[SourceFailure, ...] = ()
    incomplete_sources: Tuple[str, ...] = ()
    degradations: Tuple[Degradation, ...] = field(default_factory=tuple)

    def with_result(self, result: SourceResult) -> "AggregationContext":
        degradations = list(self.degradations)
        if result.failures:
            degradations.append(Degradation.SOURCE_UNAVAILABLE)
        if result.empty_windows:
            degradations.append(Degradation.EXTRACTION_EMPTY)
        if result.degraded_classifications:
            degradations.append(Degradation.CLASSIFICATION_DEGRADED)

        return replace(
            self,
            articles=self.articles + result.articles,
            failures=self.failures + result.failures,
            degradations=tuple(degradations),
        )

    def with_incomplete(self, source_id: str) -> "AggregationContext":
        return replace(
            self,
            incomplete_sources=self.incomplete_sources + (source_id,),
            degradations=self.degradations + (Degradation.DEADLINE_EXCEEDED,),
        )

    @property
    def deadline_exceeded(self) -> bool:
        return bool(self.incomplete_sources)
