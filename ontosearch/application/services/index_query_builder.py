"""Leaf query builder — turns (property, operator, text) into index queries.

Every value filter is an ``AndQuery`` of exactly two clauses: a term match on
the property-identity field and a field match on the property's value field.
Which fields participate depends only on the property kind.
"""

from ontosearch.domain.entities import (
    AndQuery,
    IndexField,
    IndexQuery,
    PhraseQuery,
    PrefixQuery,
    PropertyKind,
    PropertyRef,
    QueryType,
    SuffixQuery,
    TermQuery,
)
from ontosearch.domain.exceptions import UnsupportedQueryTypeError


_IDENTITY_FIELDS: dict[PropertyKind, str] = {
    PropertyKind.ANNOTATION: IndexField.ANNOTATION_IRI,
    PropertyKind.DATA: IndexField.DATA_PROPERTY_IRI,
    PropertyKind.OBJECT: IndexField.OBJECT_PROPERTY_IRI,
}

_VALUE_FIELDS: dict[PropertyKind, str] = {
    PropertyKind.ANNOTATION: IndexField.ANNOTATION_TEXT,
    PropertyKind.DATA: IndexField.FILLER_DISPLAY_NAME,
    PropertyKind.OBJECT: IndexField.FILLER_DISPLAY_NAME,
}

_VALUE_CLAUSES: dict[QueryType, type[TermQuery | PrefixQuery | SuffixQuery | PhraseQuery]] = {
    QueryType.CONTAINS: TermQuery,
    QueryType.STARTS_WITH: PrefixQuery,
    QueryType.ENDS_WITH: SuffixQuery,
    QueryType.EXACT_MATCH: PhraseQuery,
}


def identity_field(prop: PropertyRef) -> str:
    """Index field holding the IRI of a property of this kind."""
    return _IDENTITY_FIELDS[prop.kind]


def value_field(prop: PropertyRef) -> str:
    """Index field holding the textual value asserted for this property."""
    return _VALUE_FIELDS[prop.kind]


def build_value_query(
    prop: PropertyRef,
    query_type: QueryType,
    search_text: str | None,
    *,
    negated: bool = False,
) -> AndQuery:
    """Build the two-clause index query for a value filter.

    With ``negated`` the value clause becomes prohibited: documents must
    assert the property but with a value that does not match.

    Raises:
        UnsupportedQueryTypeError: ``query_type`` is a non-value type, or the
            search text is missing.
    """
    clause_type = _VALUE_CLAUSES.get(query_type)
    if clause_type is None:
        raise UnsupportedQueryTypeError(query_type, "not a value query type")
    if search_text is None or not search_text.strip():
        raise UnsupportedQueryTypeError(query_type, "search text is required")

    identity = TermQuery(identity_field(prop), prop.iri)
    value = clause_type(value_field(prop), search_text)
    if negated:
        return AndQuery(must=(identity,), must_not=(value,))
    return AndQuery(must=(identity, value))


def build_value_existence_query(prop: PropertyRef) -> IndexQuery:
    """Bare existence clause: any document asserting a value for the property."""
    return TermQuery(identity_field(prop), prop.iri)


def build_restriction_existence_query(prop: PropertyRef) -> IndexQuery:
    """Bare existence clause: any restriction document on the relation.

    Raises:
        UnsupportedQueryTypeError: annotation properties never appear in restrictions.
    """
    if prop.kind == PropertyKind.ANNOTATION:
        raise UnsupportedQueryTypeError(
            QueryType.PROPERTY_RESTRICTION_PRESENT,
            f"annotation property {prop.iri} cannot be restricted",
        )
    return TermQuery(identity_field(prop), prop.iri)
