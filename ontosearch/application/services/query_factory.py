"""Query factory and builders — the construction surface for query trees."""

import logging

from ontosearch.application.interfaces import SearchContext
from ontosearch.application.services import index_query_builder as builder
from ontosearch.application.services.universe_cache import UniverseCache
from ontosearch.domain.entities import (
    BasicQuery,
    FilteredQuery,
    MatchMode,
    NegatedQuery,
    NestedQuery,
    PropertyRef,
    QueryType,
    SearchPluginQuery,
    Universe,
    UserQuery,
)
from ontosearch.domain.exceptions import UnsupportedQueryTypeError

logger = logging.getLogger(__name__)


class QueryFactory:
    """Creates leaf queries and owns the universe cache used to evaluate them."""

    def __init__(self, search_context: SearchContext):
        self._universe = UniverseCache(search_context)

    @property
    def universe(self) -> UniverseCache:
        return self._universe

    def create_query(
        self,
        prop: PropertyRef,
        query_type: QueryType,
        search_text: str | None = None,
    ) -> BasicQuery:
        """Create the leaf query for a property/operator/value triple.

        Raises:
            UnsupportedQueryTypeError: a value type without search text, or a
                non-value type that does not apply to the property.
        """
        if query_type.is_value_type:
            return self.create_value_filter(prop, query_type, search_text)
        if search_text:
            raise UnsupportedQueryTypeError(query_type, "takes no search text")

        if query_type in (QueryType.PROPERTY_VALUE_PRESENT, QueryType.PROPERTY_VALUE_ABSENT):
            index_query = builder.build_value_existence_query(prop)
            universe = Universe.ENTITIES
        elif query_type in (QueryType.PROPERTY_RESTRICTION_PRESENT, QueryType.PROPERTY_RESTRICTION_ABSENT):
            index_query = builder.build_restriction_existence_query(prop)
            universe = Universe.CLASSES
        else:
            raise UnsupportedQueryTypeError(query_type)

        # PRESENT and ABSENT partition the same universe
        if query_type in (QueryType.PROPERTY_VALUE_ABSENT, QueryType.PROPERTY_RESTRICTION_ABSENT):
            return BasicQuery(index_query=index_query, query_type=query_type, complement=universe)
        return BasicQuery(index_query=index_query, query_type=query_type, scope=universe)

    def create_contains_filter(self, prop: PropertyRef, search_text: str) -> BasicQuery:
        return self.create_value_filter(prop, QueryType.CONTAINS, search_text)

    def create_starts_with_filter(self, prop: PropertyRef, search_text: str) -> BasicQuery:
        return self.create_value_filter(prop, QueryType.STARTS_WITH, search_text)

    def create_ends_with_filter(self, prop: PropertyRef, search_text: str) -> BasicQuery:
        return self.create_value_filter(prop, QueryType.ENDS_WITH, search_text)

    def create_exact_match_filter(self, prop: PropertyRef, search_text: str) -> BasicQuery:
        return self.create_value_filter(prop, QueryType.EXACT_MATCH, search_text)

    def filtered_query_builder(self) -> "FilteredQueryBuilder":
        return FilteredQueryBuilder()

    def user_query_builder(self) -> "UserQueryBuilder":
        return UserQueryBuilder(self)

    @staticmethod
    def create_value_filter(
        prop: PropertyRef,
        query_type: QueryType,
        search_text: str | None,
        *,
        negated: bool = False,
    ) -> BasicQuery:
        """Create a value filter; with ``negated`` the value must not match."""
        index_query = builder.build_value_query(prop, query_type, search_text, negated=negated)
        logger.debug("Built %s filter on %s: %s", query_type.value, prop, index_query)
        return BasicQuery(
            index_query=index_query,
            query_type=query_type,
        )


class FilteredQueryBuilder:
    """Append-only builder producing an immutable FilteredQuery."""

    def __init__(self) -> None:
        self._filters: list[SearchPluginQuery] = []

    def add(self, query: SearchPluginQuery) -> "FilteredQueryBuilder":
        self._filters.append(query)
        return self

    def build(self, match_mode: MatchMode = MatchMode.ALL) -> FilteredQuery:
        return FilteredQuery(filters=tuple(self._filters), match_mode=match_mode)


class UserQueryBuilder:
    """Builder for queries composed in the query editor.

    Besides leaf filters it accepts negated and nested sub-queries.
    """

    def __init__(self, factory: QueryFactory):
        self._factory = factory
        self._queries: list[SearchPluginQuery] = []

    def add_basic_query(
        self,
        prop: PropertyRef,
        query_type: QueryType,
        search_text: str | None = None,
        *,
        negated: bool = False,
    ) -> "UserQueryBuilder":
        """Add a leaf filter; ``negated`` excludes values matching the text."""
        if negated:
            if not query_type.is_value_type:
                raise UnsupportedQueryTypeError(query_type, "only value filters can be negated inline")
            query = self._factory.create_value_filter(prop, query_type, search_text, negated=True)
        else:
            query = self._factory.create_query(prop, query_type, search_text)
        self._queries.append(query)
        return self

    def add_query(self, query: SearchPluginQuery) -> "UserQueryBuilder":
        self._queries.append(query)
        return self

    def add_negated_query(self, query: FilteredQuery) -> "UserQueryBuilder":
        self._queries.append(NegatedQuery(query=query))
        return self

    def add_nested_query(self, filler_query: FilteredQuery, relation_iri: str) -> "UserQueryBuilder":
        if not relation_iri.strip():
            raise ValueError("Nested query needs a relation IRI")
        self._queries.append(NestedQuery(filler_query=filler_query, relation_iri=relation_iri))
        return self

    def build(self, match_mode: MatchMode = MatchMode.ALL) -> UserQuery:
        return UserQuery(filters=tuple(self._queries), match_mode=match_mode)
