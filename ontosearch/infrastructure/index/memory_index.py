"""In-memory implementations of the index and search-context ports.

Useful for fixtures and small ontologies held entirely in memory. Field
matching follows the same rules as the SQL adapter: analyzed text fields
compare case-insensitively, keyword (IRI) fields compare exactly.
"""

import logging
from collections.abc import Iterable

from ontosearch.application.interfaces import IndexSearcher, SearchContext
from ontosearch.domain.entities import (
    AndQuery,
    FieldQuery,
    IndexDocument,
    IndexQuery,
    OntologySignature,
    PhraseQuery,
    PrefixQuery,
    SuffixQuery,
    TermQuery,
)
from ontosearch.domain.exceptions import IndexIOError

logger = logging.getLogger(__name__)


def field_matches(query: FieldQuery, value: str) -> bool:
    """Whether a single stored value satisfies a field query."""
    needle, haystack = query.text, value
    if query.is_analyzed:
        needle, haystack = needle.lower(), haystack.lower()
        if isinstance(query, TermQuery):
            return needle in haystack

    if isinstance(query, PrefixQuery):
        return haystack.startswith(needle)
    if isinstance(query, SuffixQuery):
        return haystack.endswith(needle)
    # keyword Term, and Phrase on any field: whole-value equality
    return haystack == needle


def document_matches(query: IndexQuery, document: IndexDocument) -> bool:
    if isinstance(query, AndQuery):
        return (
            all(document_matches(clause, document) for clause in query.must)
            and not any(document_matches(clause, document) for clause in query.must_not)
        )
    return any(field_matches(query, value) for value in document.get_all(query.field))


class InMemoryIndexSearcher(IndexSearcher):
    """Linear-scan index over a list of documents; references are list positions."""

    def __init__(self, documents: Iterable[IndexDocument] = ()):
        self._documents: list[IndexDocument] = list(documents)

    def __len__(self) -> int:
        return len(self._documents)

    def search(self, query: IndexQuery) -> list[int]:
        hits = [
            position
            for position, document in enumerate(self._documents)
            if document_matches(query, document)
        ]
        logger.debug("In-memory search %s → %d hits", query, len(hits))
        return hits

    def fetch(self, ref: int) -> IndexDocument:
        try:
            return self._documents[ref]
        except (IndexError, TypeError) as exc:
            raise IndexIOError("fetch", f"no document at reference {ref!r}") from exc


class InMemorySearchContext(SearchContext):
    """Search context over a fixed list of ontology signatures."""

    def __init__(self, ontologies: Iterable[OntologySignature] = ()):
        self._ontologies = list(ontologies)

    def get_ontologies(self) -> list[OntologySignature]:
        return list(self._ontologies)
