"""SQLAlchemy implementation of the IndexSearcher port."""

import logging

from sqlalchemy import Text, and_, func, not_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from ontosearch.application.interfaces import IndexSearcher
from ontosearch.domain.entities import (
    AndQuery,
    FieldQuery,
    IndexDocument,
    IndexQuery,
    PrefixQuery,
    SuffixQuery,
    TermQuery,
)
from ontosearch.domain.exceptions import IndexIOError
from ontosearch.infrastructure.database.models.index_models import (
    IndexDocumentModel,
    IndexFieldModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemyIndexSearcher(IndexSearcher):
    """Index searcher backed by the ``index_documents`` tables.

    Every field clause compiles to an EXISTS sub-select over the document's
    field rows, so multi-valued fields match when any value matches.
    """

    def __init__(self, session: Session):
        self._session = session

    def search(self, query: IndexQuery) -> list[int]:
        stmt = (
            select(IndexDocumentModel.id)
            .where(self._compile(query))
            .order_by(IndexDocumentModel.id)
        )
        try:
            refs = list(self._session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise IndexIOError("search", str(exc)) from exc
        logger.debug("Index search %s → %d hits", query, len(refs))
        return refs

    def fetch(self, ref: int) -> IndexDocument:
        try:
            model = self._session.get(IndexDocumentModel, ref)
        except SQLAlchemyError as exc:
            raise IndexIOError("fetch", str(exc)) from exc
        if model is None:
            raise IndexIOError("fetch", f"document {ref!r} not found")
        return self._to_domain(model)

    # ── Query compilation ────────────────────────────────────────────

    def _compile(self, query: IndexQuery) -> ColumnElement[bool]:
        if isinstance(query, AndQuery):
            clauses = [self._compile(clause) for clause in query.must]
            clauses += [not_(self._compile(clause)) for clause in query.must_not]
            return and_(*clauses)

        return (
            select(IndexFieldModel.id)
            .where(
                IndexFieldModel.document_id == IndexDocumentModel.id,
                IndexFieldModel.name == query.field,
                self._value_condition(query),
            )
            .exists()
        )

    @staticmethod
    def _value_condition(query: FieldQuery) -> ColumnElement[bool]:
        column = IndexFieldModel.value
        text = query.text
        if query.is_analyzed:
            column = func.lower(column, type_=Text)
            text = text.lower()
            if isinstance(query, TermQuery):
                return column.contains(text, autoescape=True)

        if isinstance(query, PrefixQuery):
            return column.startswith(text, autoescape=True)
        if isinstance(query, SuffixQuery):
            return column.endswith(text, autoescape=True)
        return column == text

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: IndexDocumentModel) -> IndexDocument:
        fields: dict[str, list[str]] = {}
        for field_model in model.fields:
            fields.setdefault(field_model.name, []).append(field_model.value)
        return IndexDocument.from_mapping(fields)
