"""Query evaluator — resolves a query tree to the set of matching entity IRIs.

Evaluation is depth-first and synchronous: every sub-query is resolved to an
entity set before its parent applies its set operation. The only blocking
calls are the index port's ``search`` and ``fetch``.

The progress listener travels with each call and is polled before every
sub-query; a cancelled run raises ``EvaluationCancelledError`` instead of
returning a partial result. Index failures abort the whole tree.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ontosearch.application.interfaces import IndexSearcher, SearchProgressListener
from ontosearch.application.services import index_query_builder as builder
from ontosearch.application.services.progress import NullProgressListener
from ontosearch.application.services.universe_cache import UniverseCache
from ontosearch.domain.entities import (
    BasicQuery,
    FilteredQuery,
    IndexDocument,
    IndexField,
    IndexQuery,
    MatchMode,
    NegatedQuery,
    NestedQuery,
    PropertyKind,
    PropertyRef,
    SearchPluginQuery,
    Universe,
    UserQuery,
)
from ontosearch.domain.exceptions import (
    EvaluationCancelledError,
    IndexIOError,
    QueryEvaluationError,
)
from ontosearch.infrastructure.logging.colored_logger import EvaluationLogger, EvaluationStage

plog = EvaluationLogger("QueryEvaluator")


@dataclass
class _EvaluationRun:
    """Per-call state threaded through the recursion."""

    listener: SearchProgressListener
    completed: int = 0
    searches: int = 0


class QueryEvaluator:
    """Evaluates query trees against one index and one universe cache."""

    def __init__(self, searcher: IndexSearcher, universe: UniverseCache):
        self._searcher = searcher
        self._universe = universe
        self._handlers: dict[type, Callable[[SearchPluginQuery, _EvaluationRun, int], set[str]]] = {
            BasicQuery: self._evaluate_basic,
            FilteredQuery: self._evaluate_filtered,
            UserQuery: self._evaluate_filtered,
            NegatedQuery: self._evaluate_negated,
            NestedQuery: self._evaluate_nested,
        }

    def evaluate(
        self,
        query: SearchPluginQuery,
        listener: SearchProgressListener | None = None,
    ) -> frozenset[str]:
        """Evaluate a query tree.

        Raises:
            QueryEvaluationError: the index failed at any point of the tree.
            EvaluationCancelledError: the listener requested cancellation.
        """
        run = _EvaluationRun(listener=listener or NullProgressListener())
        result = self._evaluate(query, run, depth=0)
        plog.detail("Evaluation finished", sub_queries=run.completed, searches=run.searches)
        return frozenset(result)

    # ── Dispatch ─────────────────────────────────────────────────────

    def _evaluate(self, query: SearchPluginQuery, run: _EvaluationRun, depth: int) -> set[str]:
        if run.listener.is_cancelled():
            plog.node(EvaluationStage.CANCELLED, depth, "Cancellation requested", completed=run.completed)
            raise EvaluationCancelledError(run.completed)

        handler = self._handlers.get(type(query))
        if handler is None:
            raise TypeError(f"Unsupported query variant: {type(query).__name__}")

        run.listener.on_query_started(query, depth)
        result = handler(query, run, depth)
        run.completed += 1
        run.listener.on_query_finished(query, depth, len(result))
        return result

    # ── Variants ─────────────────────────────────────────────────────

    def _evaluate_basic(self, query: BasicQuery, run: _EvaluationRun, depth: int) -> set[str]:
        documents = self._search_documents(query.index_query, run)
        hits = {doc.entity_iri for doc in documents if doc.entity_iri is not None}

        bound = query.complement or query.scope
        if bound is None:
            plog.node(EvaluationStage.BASIC, depth, str(query), hits=len(hits))
            return hits

        universe = self._universe_of(bound)
        plog.node(
            EvaluationStage.BASIC,
            depth,
            str(query),
            hits=len(hits),
            universe=len(universe),
        )
        if query.complement is not None:
            return set(universe) - hits
        return hits & universe

    def _evaluate_filtered(self, query: FilteredQuery, run: _EvaluationRun, depth: int) -> set[str]:
        plog.node(
            EvaluationStage.FILTERED,
            depth,
            f"Combining {len(query)} sub-queries",
            mode=query.match_mode.value,
        )
        result: set[str] = set()
        for position, child in enumerate(query.filters):
            child_result = self._evaluate(child, run, depth + 1)
            if query.match_mode == MatchMode.ALL:
                result = child_result if position == 0 else result & child_result
            else:
                result |= child_result
        return result

    def _evaluate_negated(self, query: NegatedQuery, run: _EvaluationRun, depth: int) -> set[str]:
        inner = self._evaluate(query.query, run, depth + 1)
        universe = self._universe_of(query.universe)
        plog.node(
            EvaluationStage.NEGATED,
            depth,
            f"Complementing {len(inner)} entities",
            universe=query.universe.value,
        )
        return set(universe) - inner

    def _evaluate_nested(self, query: NestedQuery, run: _EvaluationRun, depth: int) -> set[str]:
        fillers = self._evaluate(query.filler_query, run, depth + 1)
        if not fillers:
            plog.detail("No qualifying fillers; skipping restriction search", relation=query.relation_iri)
            return set()

        if run.listener.is_cancelled():
            raise EvaluationCancelledError(run.completed)

        restriction = builder.build_restriction_existence_query(
            PropertyRef(query.relation_iri, PropertyKind.OBJECT)
        )
        holders: set[str] = set()
        for doc in self._search_documents(restriction, run):
            if doc.entity_iri is None:
                continue
            if any(filler in fillers for filler in doc.get_all(IndexField.FILLER_IRI)):
                holders.add(doc.entity_iri)

        plog.node(
            EvaluationStage.NESTED,
            depth,
            f"{len(holders)} holders of {query.relation_iri}",
            fillers=len(fillers),
        )
        return holders

    # ── Index access ─────────────────────────────────────────────────

    def _universe_of(self, universe: Universe) -> frozenset[str]:
        try:
            return self._universe.get(universe)
        except IndexIOError as exc:
            plog.failure(EvaluationStage.UNIVERSE, f"Could not populate {universe.value}", error=exc)
            raise QueryEvaluationError(f"Could not populate the {universe.value} universe") from exc

    def _search_documents(self, index_query: IndexQuery, run: _EvaluationRun) -> list[IndexDocument]:
        run.searches += 1
        try:
            refs = self._searcher.search(index_query)
            return [self._searcher.fetch(ref) for ref in refs]
        except IndexIOError as exc:
            plog.failure(EvaluationStage.SEARCH, f"Index query {index_query} failed", error=exc)
            raise QueryEvaluationError(f"Could not evaluate index query {index_query}") from exc
