"""Unit tests for QueryFactory and the query builders."""

import pytest

from ontosearch.application.services import QueryFactory
from ontosearch.domain.entities import (
    AndQuery,
    BasicQuery,
    FilteredQuery,
    MatchMode,
    NegatedQuery,
    NestedQuery,
    OntologySignature,
    PropertyKind,
    PropertyRef,
    QueryType,
    TermQuery,
    Universe,
    UserQuery,
)
from ontosearch.domain.exceptions import UnsupportedQueryTypeError
from ontosearch.infrastructure.index.memory_index import InMemorySearchContext

HAS_SYNONYM = PropertyRef("http://example.org/onto#hasSynonym", PropertyKind.ANNOTATION)
PART_OF = PropertyRef("http://example.org/onto#partOf", PropertyKind.OBJECT)


@pytest.fixture
def factory() -> QueryFactory:
    return QueryFactory(InMemorySearchContext([OntologySignature("http://example.org/onto")]))


class TestCreateQuery:
    def test_value_type_builds_value_filter(self, factory):
        query = factory.create_query(HAS_SYNONYM, QueryType.CONTAINS, "tumor")

        assert isinstance(query, BasicQuery)
        assert isinstance(query.index_query, AndQuery)
        assert query.query_type == QueryType.CONTAINS
        assert query.complement is None

    def test_value_type_without_text_is_rejected(self, factory):
        with pytest.raises(UnsupportedQueryTypeError):
            factory.create_query(HAS_SYNONYM, QueryType.EXACT_MATCH)

    def test_non_value_type_with_text_is_rejected(self, factory):
        with pytest.raises(UnsupportedQueryTypeError):
            factory.create_query(HAS_SYNONYM, QueryType.PROPERTY_VALUE_PRESENT, "tumor")

    def test_value_present_and_absent_share_index_query(self, factory):
        present = factory.create_query(HAS_SYNONYM, QueryType.PROPERTY_VALUE_PRESENT)
        absent = factory.create_query(HAS_SYNONYM, QueryType.PROPERTY_VALUE_ABSENT)

        assert isinstance(present.index_query, TermQuery)
        assert present.index_query == absent.index_query
        assert present.scope == Universe.ENTITIES
        assert present.complement is None
        assert absent.complement == Universe.ENTITIES
        assert absent.scope is None

    def test_restriction_pair_bound_to_classes(self, factory):
        present = factory.create_query(PART_OF, QueryType.PROPERTY_RESTRICTION_PRESENT)
        absent = factory.create_query(PART_OF, QueryType.PROPERTY_RESTRICTION_ABSENT)

        assert present.scope == Universe.CLASSES
        assert absent.complement == Universe.CLASSES

    def test_value_filters_are_unbounded(self, factory):
        query = factory.create_contains_filter(HAS_SYNONYM, "tumor")
        assert query.scope is None
        assert query.complement is None

    def test_restriction_on_annotation_property_is_rejected(self, factory):
        with pytest.raises(UnsupportedQueryTypeError):
            factory.create_query(HAS_SYNONYM, QueryType.PROPERTY_RESTRICTION_PRESENT)

    def test_named_helpers_match_create_query(self, factory):
        assert factory.create_contains_filter(HAS_SYNONYM, "a") == factory.create_query(
            HAS_SYNONYM, QueryType.CONTAINS, "a"
        )
        assert factory.create_starts_with_filter(HAS_SYNONYM, "a").query_type == QueryType.STARTS_WITH
        assert factory.create_ends_with_filter(HAS_SYNONYM, "a").query_type == QueryType.ENDS_WITH
        assert factory.create_exact_match_filter(HAS_SYNONYM, "a").query_type == QueryType.EXACT_MATCH

    def test_leaf_queries_are_match_all(self, factory):
        assert factory.create_contains_filter(HAS_SYNONYM, "a").is_match_all


class TestFilteredQueryBuilder:
    def test_build_preserves_order_and_mode(self, factory):
        first = factory.create_contains_filter(HAS_SYNONYM, "a")
        second = factory.create_contains_filter(HAS_SYNONYM, "b")

        query = factory.filtered_query_builder().add(first).add(second).build(MatchMode.ANY)

        assert isinstance(query, FilteredQuery)
        assert query.filters == (first, second)
        assert not query.is_match_all

    def test_defaults_to_match_all(self, factory):
        query = factory.filtered_query_builder().build()
        assert query.match_mode == MatchMode.ALL
        assert query.is_empty()

    def test_structural_equality_is_order_sensitive(self, factory):
        a = factory.create_contains_filter(HAS_SYNONYM, "a")
        b = factory.create_contains_filter(HAS_SYNONYM, "b")

        ab = factory.filtered_query_builder().add(a).add(b).build()
        ab_again = factory.filtered_query_builder().add(a).add(b).build()
        ba = factory.filtered_query_builder().add(b).add(a).build()

        assert ab == ab_again
        assert hash(ab) == hash(ab_again)
        assert ab != ba


class TestUserQueryBuilder:
    def test_collects_all_variants(self, factory):
        inner = factory.user_query_builder().add_basic_query(HAS_SYNONYM, QueryType.CONTAINS, "x").build()

        query = (
            factory.user_query_builder()
            .add_basic_query(HAS_SYNONYM, QueryType.PROPERTY_VALUE_PRESENT)
            .add_negated_query(inner)
            .add_nested_query(inner, PART_OF.iri)
            .build()
        )

        assert isinstance(query, UserQuery)
        assert len(query) == 3
        kinds = [type(child) for child in query]
        assert kinds == [BasicQuery, NegatedQuery, NestedQuery]
        assert query.filters[1].universe == Universe.ENTITIES
        assert query.filters[2].relation_iri == PART_OF.iri

    def test_inline_negation_prohibits_value_clause(self, factory):
        query = (
            factory.user_query_builder()
            .add_basic_query(HAS_SYNONYM, QueryType.CONTAINS, "tumor", negated=True)
            .build()
        )
        leaf = query.filters[0]
        assert len(leaf.index_query.must) == 1
        assert len(leaf.index_query.must_not) == 1

    def test_inline_negation_of_non_value_type_is_rejected(self, factory):
        with pytest.raises(UnsupportedQueryTypeError):
            factory.user_query_builder().add_basic_query(
                HAS_SYNONYM, QueryType.PROPERTY_VALUE_PRESENT, negated=True
            )

    def test_nested_query_requires_relation(self, factory):
        with pytest.raises(ValueError):
            factory.user_query_builder().add_nested_query(factory.user_query_builder().build(), " ")

    def test_empty_user_query(self, factory):
        query = factory.user_query_builder().build(MatchMode.ANY)
        assert query.is_empty()
        assert len(query) == 0
        assert list(query) == []
        assert query.match_mode == MatchMode.ANY

    def test_builders_are_independent(self, factory):
        one = factory.user_query_builder().add_basic_query(HAS_SYNONYM, QueryType.CONTAINS, "x")
        two = factory.user_query_builder()
        assert len(one.build()) == 1
        assert len(two.build()) == 0
