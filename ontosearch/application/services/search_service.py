"""Search service — evaluates query trees and reports outcomes.

Thin application-layer facade over the QueryEvaluator: applies the
evaluation deadline and turns cancellation into a CANCELLED outcome.
"""

import time

from ontosearch.application.interfaces import IndexSearcher, SearchProgressListener
from ontosearch.application.services.progress import CancellableProgressListener
from ontosearch.application.services.query_evaluator import QueryEvaluator
from ontosearch.application.services.query_factory import QueryFactory
from ontosearch.domain.entities import SearchOutcome, SearchPluginQuery, SearchStatus
from ontosearch.domain.exceptions import EvaluationCancelledError, QueryEvaluationError
from ontosearch.infrastructure.logging.colored_logger import EvaluationLogger, EvaluationStage

plog = EvaluationLogger("SearchService")


class _CountingListener(SearchProgressListener):
    """Delegates to the caller's listener and counts finished sub-queries."""

    def __init__(self, inner: SearchProgressListener):
        self._inner = inner
        self.finished = 0

    def is_cancelled(self) -> bool:
        return self._inner.is_cancelled()

    def on_query_started(self, query: SearchPluginQuery, depth: int) -> None:
        self._inner.on_query_started(query, depth)

    def on_query_finished(self, query: SearchPluginQuery, depth: int, result_size: int) -> None:
        self.finished += 1
        self._inner.on_query_finished(query, depth, result_size)


class SearchService:
    """Application service for evaluating composed queries."""

    def __init__(
        self,
        factory: QueryFactory,
        searcher: IndexSearcher,
        *,
        timeout_seconds: float | None = None,
    ):
        self._factory = factory
        self._evaluator = QueryEvaluator(searcher, factory.universe)
        self._timeout_seconds = timeout_seconds

    @property
    def factory(self) -> QueryFactory:
        return self._factory

    def search(
        self,
        query: SearchPluginQuery,
        listener: SearchProgressListener | None = None,
    ) -> SearchOutcome:
        """Evaluate a query tree.

        Without an explicit listener the configured timeout applies.

        Raises:
            QueryEvaluationError: the index failed; nothing is retried.
        """
        if listener is None:
            listener = CancellableProgressListener(self._timeout_seconds)
        counter = _CountingListener(listener)

        plog.node(EvaluationStage.SEARCH, 0, "Evaluating query", query=str(query))
        start = time.monotonic()
        try:
            entities = self._evaluator.evaluate(query, counter)
        except EvaluationCancelledError as exc:
            duration_ms = int((time.monotonic() - start) * 1000)
            plog.outcome(
                EvaluationStage.CANCELLED,
                "Evaluation cancelled",
                completed=exc.completed_queries,
                duration_ms=duration_ms,
            )
            return SearchOutcome(
                status=SearchStatus.CANCELLED,
                completed_queries=exc.completed_queries,
                duration_ms=duration_ms,
            )
        except QueryEvaluationError as exc:
            plog.failure(EvaluationStage.ERROR, "Evaluation failed", error=exc)
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        plog.outcome(
            EvaluationStage.COMPLETE,
            f"{len(entities)} entities matched",
            duration_ms=duration_ms,
        )
        return SearchOutcome(
            status=SearchStatus.COMPLETED,
            entities=entities,
            completed_queries=counter.finished,
            duration_ms=duration_ms,
        )
