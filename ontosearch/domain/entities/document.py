"""Domain entities for indexed documents and ontology signatures."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ontosearch.domain.entities.index_query import IndexField


# Opaque reference returned by an index search; only meaningful to the adapter that issued it.
DocumentRef = Any


@dataclass(frozen=True)
class IndexDocument:
    """An indexed record describing one entity, relation, or annotation occurrence.

    Fields are ``(name, values)`` pairs sorted by name, so documents compare
    and hash by content.
    """

    fields: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def get(self, name: str) -> str | None:
        """Return the first value of a field, or None when absent."""
        values = self.get_all(name)
        return values[0] if values else None

    def get_all(self, name: str) -> tuple[str, ...]:
        for field_name, values in self.fields:
            if field_name == name:
                return values
        return ()

    @property
    def entity_iri(self) -> str | None:
        """The entity this document annotates."""
        return self.get(IndexField.ENTITY_IRI)

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Iterable[str]]) -> "IndexDocument":
        return cls(fields=tuple(sorted((name, tuple(values)) for name, values in fields.items())))

    @classmethod
    def of(cls, **values: str | list[str] | tuple[str, ...]) -> "IndexDocument":
        """Build a document from keyword arguments, wrapping single values."""
        return cls.from_mapping({
            name: (value,) if isinstance(value, str) else value
            for name, value in values.items()
        })


@dataclass(frozen=True)
class OntologySignature:
    """The entities and classes declared by one ontology in scope."""

    iri: str
    entities: frozenset[str] = frozenset()
    classes: frozenset[str] = frozenset()
