"""Leaf index query language — immutable nodes evaluated by an index adapter."""

from dataclasses import dataclass


class IndexField:
    """Names of the fields stored on index documents."""

    ENTITY_IRI = "entity_iri"
    DISPLAY_NAME = "display_name"
    ANNOTATION_IRI = "annotation_iri"
    ANNOTATION_TEXT = "annotation_text"
    DATA_PROPERTY_IRI = "data_property_iri"
    OBJECT_PROPERTY_IRI = "object_property_iri"
    FILLER_IRI = "filler_iri"
    FILLER_DISPLAY_NAME = "filler_display_name"


# Free-text fields compared case-insensitively; every other field is a keyword (IRI) field.
ANALYZED_FIELDS: frozenset[str] = frozenset({
    IndexField.DISPLAY_NAME,
    IndexField.ANNOTATION_TEXT,
    IndexField.FILLER_DISPLAY_NAME,
})


@dataclass(frozen=True)
class FieldQuery:
    """Base for single-field matches."""

    field: str
    text: str

    @property
    def is_analyzed(self) -> bool:
        return self.field in ANALYZED_FIELDS


@dataclass(frozen=True)
class TermQuery(FieldQuery):
    """Matches documents whose field contains the term."""

    def __str__(self) -> str:
        return f"{self.field}:{self.text}"


@dataclass(frozen=True)
class PrefixQuery(FieldQuery):
    def __str__(self) -> str:
        return f"{self.field}:{self.text}*"


@dataclass(frozen=True)
class SuffixQuery(FieldQuery):
    def __str__(self) -> str:
        return f"{self.field}:*{self.text}"


@dataclass(frozen=True)
class PhraseQuery(FieldQuery):
    def __str__(self) -> str:
        return f'{self.field}:"{self.text}"'


@dataclass(frozen=True)
class AndQuery:
    """Conjunction of required clauses, optionally excluding prohibited ones."""

    must: tuple["IndexQuery", ...]
    must_not: tuple["IndexQuery", ...] = ()

    def __str__(self) -> str:
        parts = [f"+{clause}" for clause in self.must]
        parts += [f"-{clause}" for clause in self.must_not]
        return f"({' '.join(parts)})"


IndexQuery = TermQuery | PrefixQuery | SuffixQuery | PhraseQuery | AndQuery
