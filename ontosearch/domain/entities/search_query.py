"""Search query tree — immutable value objects evaluated by the QueryEvaluator.

A query tree is a tagged union of four variants:

    BasicQuery     one leaf index query (presence, absence or value filter)
    FilteredQuery  ordered children folded with a MatchMode (UserQuery is the
                   user-facing flavour produced by UserQueryBuilder)
    NegatedQuery   complement of a sub-query against a cached universe
    NestedQuery    holders of a relation whose filler satisfies a sub-query

Trees are built once via the builders in ``query_factory`` and never mutated;
they can be shared and evaluated any number of times.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from ontosearch.domain.entities.index_query import IndexQuery
from ontosearch.domain.entities.property import (
    MatchMode,
    QueryType,
    Universe,
)


@dataclass(frozen=True)
class BasicQuery:
    """A single index query whose hits are mapped back to their entities.

    ``scope`` limits the hits to a universe (the *_PRESENT query types);
    ``complement`` evaluates to that universe minus the hits (the *_ABSENT
    query types), so a PRESENT/ABSENT pair partitions the same universe.
    """

    index_query: IndexQuery
    query_type: QueryType
    scope: Universe | None = None
    complement: Universe | None = None

    @property
    def is_match_all(self) -> bool:
        return True

    def __str__(self) -> str:
        if self.complement:
            prefix = f"NOT-IN-{self.complement.value} "
        elif self.scope:
            prefix = f"IN-{self.scope.value} "
        else:
            prefix = ""
        return f"{prefix}{self.index_query}"


@dataclass(frozen=True)
class FilteredQuery:
    """Ordered sub-queries combined by intersection (ALL) or union (ANY)."""

    filters: tuple["SearchPluginQuery", ...] = ()
    match_mode: MatchMode = MatchMode.ALL

    @property
    def is_match_all(self) -> bool:
        return self.match_mode == MatchMode.ALL

    def is_empty(self) -> bool:
        return not self.filters

    def __iter__(self) -> Iterator["SearchPluginQuery"]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def __str__(self) -> str:
        joined = ", ".join(str(f) for f in self.filters)
        return f"{self.match_mode.value.upper()}[{joined}]"


@dataclass(frozen=True)
class UserQuery(FilteredQuery):
    """A filtered query composed in the query editor."""


@dataclass(frozen=True)
class NegatedQuery:
    """Complement of ``query`` against ``universe``."""

    query: "SearchPluginQuery"
    universe: Universe = Universe.ENTITIES

    @property
    def is_match_all(self) -> bool:
        return self.query.is_match_all

    def __str__(self) -> str:
        return f"NOT({self.query})"


@dataclass(frozen=True)
class NestedQuery:
    """Entities holding ``relation_iri`` towards a filler matched by ``filler_query``."""

    filler_query: "SearchPluginQuery"
    relation_iri: str

    @property
    def is_match_all(self) -> bool:
        return self.filler_query.is_match_all

    def __str__(self) -> str:
        return f"SOME({self.relation_iri}, {self.filler_query})"


SearchPluginQuery = BasicQuery | FilteredQuery | NegatedQuery | NestedQuery
