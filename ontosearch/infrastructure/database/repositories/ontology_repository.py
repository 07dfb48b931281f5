"""SQLAlchemy implementation of the SearchContext port."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ontosearch.application.interfaces import SearchContext
from ontosearch.domain.entities import OntologySignature
from ontosearch.domain.exceptions import IndexIOError
from ontosearch.infrastructure.database.models.ontology_models import OntologyModel


class SQLAlchemySearchContext(SearchContext):
    """Reads ontology signatures from the ``ontologies`` tables.

    Opens a short-lived session per call so it can outlive any request.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def get_ontologies(self) -> list[OntologySignature]:
        try:
            with self._session_factory() as session:
                models = session.scalars(
                    select(OntologyModel).order_by(OntologyModel.iri)
                ).all()
                return [self._to_domain(m) for m in models]
        except SQLAlchemyError as exc:
            raise IndexIOError("ontology scan", str(exc)) from exc

    @staticmethod
    def _to_domain(model: OntologyModel) -> OntologySignature:
        return OntologySignature(
            iri=model.iri,
            entities=frozenset(e.entity_iri for e in model.entities),
            classes=frozenset(e.entity_iri for e in model.entities if e.is_class),
        )
