"""Abstract interface for evaluation progress reporting and cancellation."""

from abc import ABC, abstractmethod

from ontosearch.domain.entities import SearchPluginQuery


class SearchProgressListener(ABC):
    """Passed explicitly into every recursive evaluation call.

    The evaluator polls ``is_cancelled`` at each child-query boundary and
    reports every sub-query it starts and finishes.
    """

    @abstractmethod
    def is_cancelled(self) -> bool:
        """Return True once the caller wants the evaluation aborted."""
        ...

    def on_query_started(self, query: SearchPluginQuery, depth: int) -> None:
        """Called before a (sub-)query is evaluated."""

    def on_query_finished(self, query: SearchPluginQuery, depth: int, result_size: int) -> None:
        """Called after a (sub-)query produced its entity set."""
