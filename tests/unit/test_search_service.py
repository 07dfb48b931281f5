"""Unit tests for the SearchService — outcomes, deadlines and failures."""

import time

import pytest

from ontosearch.application.services import (
    CancellableProgressListener,
    QueryFactory,
    SearchService,
)
from ontosearch.domain.entities import (
    IndexDocument,
    OntologySignature,
    PropertyKind,
    PropertyRef,
    QueryType,
    SearchStatus,
)
from ontosearch.domain.exceptions import IndexIOError, QueryEvaluationError
from ontosearch.infrastructure.index.memory_index import (
    InMemoryIndexSearcher,
    InMemorySearchContext,
)

LABEL = PropertyRef("http://www.w3.org/2000/01/rdf-schema#label", PropertyKind.ANNOTATION)

DOCS = [
    IndexDocument.of(entity_iri="urn:a", annotation_iri=LABEL.iri, annotation_text="alpha"),
    IndexDocument.of(entity_iri="urn:b", annotation_iri=LABEL.iri, annotation_text="beta"),
]


# ── Fakes ────────────────────────────────────────────────────────────


class BrokenSearcher(InMemoryIndexSearcher):
    def search(self, query):
        raise IndexIOError("search", "disk read failed")


def make_service(searcher=None, timeout_seconds=None) -> SearchService:
    factory = QueryFactory(InMemorySearchContext([
        OntologySignature("urn:onto", entities=frozenset({"urn:a", "urn:b", "urn:c"}))
    ]))
    return SearchService(factory, searcher or InMemoryIndexSearcher(DOCS), timeout_seconds=timeout_seconds)


def any_label_query(service: SearchService):
    return (
        service.factory.user_query_builder()
        .add_basic_query(LABEL, QueryType.CONTAINS, "alpha")
        .add_basic_query(LABEL, QueryType.CONTAINS, "beta")
        .build()
    )


# ── Tests ────────────────────────────────────────────────────────────


class TestSearchService:
    def test_completed_outcome_carries_entities(self):
        service = make_service()
        query = service.factory.create_query(LABEL, QueryType.PROPERTY_VALUE_ABSENT)

        outcome = service.search(query)

        assert outcome.status == SearchStatus.COMPLETED
        assert not outcome.cancelled
        assert outcome.entities == frozenset({"urn:c"})
        assert outcome.total == 1
        assert outcome.completed_queries == 1

    def test_completed_queries_counts_every_sub_query(self):
        service = make_service()
        outcome = service.search(any_label_query(service))

        assert outcome.entities == frozenset()
        assert outcome.completed_queries == 3

    def test_cancelled_listener_yields_cancelled_outcome(self):
        service = make_service()
        listener = CancellableProgressListener()
        listener.cancel()

        outcome = service.search(any_label_query(service), listener)

        assert outcome.status == SearchStatus.CANCELLED
        assert outcome.cancelled
        assert outcome.entities == frozenset()

    def test_caller_listener_still_receives_progress(self):
        service = make_service()
        listener = CancellableProgressListener()

        service.search(any_label_query(service), listener)

        assert listener.finished == 3

    def test_expired_deadline_cancels(self):
        listener = CancellableProgressListener(timeout_seconds=0.001)
        service = make_service()
        time.sleep(0.01)

        outcome = service.search(any_label_query(service), listener)

        assert outcome.status == SearchStatus.CANCELLED

    def test_no_timeout_never_cancels(self):
        service = make_service(timeout_seconds=None)
        outcome = service.search(service.factory.create_contains_filter(LABEL, "alp"))

        assert outcome.status == SearchStatus.COMPLETED
        assert outcome.entities == frozenset({"urn:a"})

    def test_index_failure_propagates(self):
        service = make_service(searcher=BrokenSearcher(DOCS))

        with pytest.raises(QueryEvaluationError):
            service.search(service.factory.create_contains_filter(LABEL, "alpha"))
