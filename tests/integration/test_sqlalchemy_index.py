"""Integration tests for the SQLAlchemy index adapters over in-memory SQLite."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ontosearch.application.services import QueryEvaluator, QueryFactory
from ontosearch.domain.entities import (
    AndQuery,
    IndexField,
    MatchMode,
    PhraseQuery,
    PrefixQuery,
    PropertyKind,
    PropertyRef,
    QueryType,
    SuffixQuery,
    TermQuery,
)
from ontosearch.domain.exceptions import IndexIOError, QueryEvaluationError
from ontosearch.infrastructure.database.base import Base
from ontosearch.infrastructure.database.models import (
    IndexDocumentModel,
    IndexFieldModel,
    OntologyEntityModel,
    OntologyModel,
)
from ontosearch.infrastructure.database.repositories import (
    SQLAlchemyIndexSearcher,
    SQLAlchemySearchContext,
)

ONTO = "http://example.org/onto#"
LABEL = "http://www.w3.org/2000/01/rdf-schema#label"
PART_OF = ONTO + "partOf"


def add_document(session: Session, **fields: str | list[str]) -> int:
    model = IndexDocumentModel()
    for name, value in fields.items():
        for item in ([value] if isinstance(value, str) else value):
            model.fields.append(IndexFieldModel(name=name, value=item))
    session.add(model)
    session.flush()
    return model.id


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def factory(engine):
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


@pytest.fixture
def session(factory):
    with factory() as session:
        add_document(session, entity_iri=ONTO + "A", annotation_iri=LABEL, annotation_text="Neoplastic Cell")
        add_document(session, entity_iri=ONTO + "B", annotation_iri=LABEL, annotation_text="neoplastic tissue")
        add_document(session, entity_iri=ONTO + "C", annotation_iri=LABEL, annotation_text=["blood cell", "100% red"])
        add_document(
            session,
            entity_iri=ONTO + "D",
            object_property_iri=PART_OF,
            filler_iri=ONTO + "B",
            filler_display_name="neoplastic tissue",
        )
        ontology = OntologyModel(iri="http://example.org/onto")
        for name, is_class in [("A", True), ("B", True), ("C", True), ("D", True), ("partOf", False)]:
            ontology.entities.append(OntologyEntityModel(entity_iri=ONTO + name, is_class=is_class))
        session.add(ontology)
        session.commit()
        yield session


def entities_for(searcher: SQLAlchemyIndexSearcher, query) -> set[str]:
    return {searcher.fetch(ref).entity_iri for ref in searcher.search(query)}


class TestFieldMatching:
    def test_analyzed_term_is_case_insensitive_substring(self, session):
        searcher = SQLAlchemyIndexSearcher(session)
        query = TermQuery(IndexField.ANNOTATION_TEXT, "CELL")

        assert entities_for(searcher, query) == {ONTO + "A", ONTO + "C"}

    def test_analyzed_prefix_and_suffix(self, session):
        searcher = SQLAlchemyIndexSearcher(session)

        assert entities_for(searcher, PrefixQuery(IndexField.ANNOTATION_TEXT, "neo")) == {ONTO + "A", ONTO + "B"}
        assert entities_for(searcher, SuffixQuery(IndexField.ANNOTATION_TEXT, "tissue")) == {ONTO + "B"}

    def test_analyzed_phrase_is_whole_value(self, session):
        searcher = SQLAlchemyIndexSearcher(session)

        assert entities_for(searcher, PhraseQuery(IndexField.ANNOTATION_TEXT, "neoplastic cell")) == {ONTO + "A"}
        assert entities_for(searcher, PhraseQuery(IndexField.ANNOTATION_TEXT, "neoplastic")) == set()

    def test_keyword_term_requires_exact_value(self, session):
        searcher = SQLAlchemyIndexSearcher(session)

        assert entities_for(searcher, TermQuery(IndexField.ANNOTATION_IRI, "label")) == set()
        assert len(searcher.search(TermQuery(IndexField.ANNOTATION_IRI, LABEL))) == 3

    def test_like_wildcards_are_escaped(self, session):
        searcher = SQLAlchemyIndexSearcher(session)

        assert entities_for(searcher, TermQuery(IndexField.ANNOTATION_TEXT, "100%")) == {ONTO + "C"}
        assert entities_for(searcher, TermQuery(IndexField.ANNOTATION_TEXT, "%cell")) == set()

    def test_and_query_with_prohibited_clause(self, session):
        searcher = SQLAlchemyIndexSearcher(session)
        query = AndQuery(
            must=(TermQuery(IndexField.ANNOTATION_IRI, LABEL),),
            must_not=(TermQuery(IndexField.ANNOTATION_TEXT, "neoplastic"),),
        )

        assert entities_for(searcher, query) == {ONTO + "C"}

    def test_fetch_groups_multi_valued_fields(self, session):
        searcher = SQLAlchemyIndexSearcher(session)
        [ref] = searcher.search(PhraseQuery(IndexField.ANNOTATION_TEXT, "blood cell"))

        document = searcher.fetch(ref)

        assert document.get_all(IndexField.ANNOTATION_TEXT) == ("blood cell", "100% red")
        assert document.get(IndexField.ANNOTATION_IRI) == LABEL

    def test_fetch_unknown_document_raises(self, session):
        with pytest.raises(IndexIOError):
            SQLAlchemyIndexSearcher(session).fetch(9999)


class TestSearchContext:
    def test_reads_ontology_signatures(self, session, factory):
        [signature] = SQLAlchemySearchContext(factory).get_ontologies()

        assert signature.iri == "http://example.org/onto"
        assert ONTO + "partOf" in signature.entities
        assert ONTO + "partOf" not in signature.classes
        assert len(signature.classes) == 4

    def test_missing_tables_raise_index_error(self):
        bare = create_engine("sqlite://", poolclass=StaticPool)
        context = SQLAlchemySearchContext(sessionmaker(bare, class_=Session))

        with pytest.raises(IndexIOError):
            context.get_ontologies()


class TestEvaluationOverSql:
    def test_filtered_and_nested_queries(self, session, factory):
        query_factory = QueryFactory(SQLAlchemySearchContext(factory))
        evaluator = QueryEvaluator(SQLAlchemyIndexSearcher(session), query_factory.universe)
        label = PropertyRef(LABEL, PropertyKind.ANNOTATION)

        cells = (
            query_factory.user_query_builder()
            .add_basic_query(label, QueryType.CONTAINS, "cell")
            .add_basic_query(label, QueryType.STARTS_WITH, "neo")
            .build(MatchMode.ALL)
        )
        tissue = query_factory.user_query_builder().add_basic_query(label, QueryType.CONTAINS, "tissue").build()
        part_of_tissue = query_factory.user_query_builder().add_nested_query(tissue, PART_OF).build()

        assert evaluator.evaluate(cells) == {ONTO + "A"}
        assert evaluator.evaluate(part_of_tissue) == {ONTO + "D"}

    def test_restriction_absent_over_classes(self, session, factory):
        query_factory = QueryFactory(SQLAlchemySearchContext(factory))
        evaluator = QueryEvaluator(SQLAlchemyIndexSearcher(session), query_factory.universe)
        part_of = PropertyRef(PART_OF, PropertyKind.OBJECT)

        absent = query_factory.create_query(part_of, QueryType.PROPERTY_RESTRICTION_ABSENT)

        assert evaluator.evaluate(absent) == {ONTO + "A", ONTO + "B", ONTO + "C"}

    def test_missing_index_tables_fail_evaluation(self, factory):
        bare = create_engine("sqlite://", poolclass=StaticPool)
        with Session(bare) as session:
            query_factory = QueryFactory(SQLAlchemySearchContext(factory))
            evaluator = QueryEvaluator(SQLAlchemyIndexSearcher(session), query_factory.universe)
            label = PropertyRef(LABEL, PropertyKind.ANNOTATION)

            with pytest.raises(QueryEvaluationError):
                evaluator.evaluate(query_factory.create_contains_filter(label, "cell"))
