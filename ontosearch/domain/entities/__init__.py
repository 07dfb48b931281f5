from .property import (
    PropertyKind,
    PropertyRef,
    QueryType,
    VALUE_QUERY_TYPES,
    NON_VALUE_QUERY_TYPES,
    MatchMode,
    Universe,
)
from .index_query import (
    IndexField,
    ANALYZED_FIELDS,
    IndexQuery,
    FieldQuery,
    TermQuery,
    PrefixQuery,
    SuffixQuery,
    PhraseQuery,
    AndQuery,
)
from .document import DocumentRef, IndexDocument, OntologySignature
from .search_query import (
    SearchPluginQuery,
    BasicQuery,
    FilteredQuery,
    UserQuery,
    NegatedQuery,
    NestedQuery,
)
from .search_result import SearchStatus, SearchOutcome

__all__ = [
    "PropertyKind",
    "PropertyRef",
    "QueryType",
    "VALUE_QUERY_TYPES",
    "NON_VALUE_QUERY_TYPES",
    "MatchMode",
    "Universe",
    "IndexField",
    "ANALYZED_FIELDS",
    "IndexQuery",
    "FieldQuery",
    "TermQuery",
    "PrefixQuery",
    "SuffixQuery",
    "PhraseQuery",
    "AndQuery",
    "DocumentRef",
    "IndexDocument",
    "OntologySignature",
    "SearchPluginQuery",
    "BasicQuery",
    "FilteredQuery",
    "UserQuery",
    "NegatedQuery",
    "NestedQuery",
    "SearchStatus",
    "SearchOutcome",
]
