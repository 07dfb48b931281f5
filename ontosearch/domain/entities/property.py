"""Domain entities for ontology properties and query operators."""

from dataclasses import dataclass
from enum import Enum


class PropertyKind(str, Enum):
    """The kind of an ontology property — selects index fields and universe."""

    DATA = "data"
    OBJECT = "object"
    ANNOTATION = "annotation"


@dataclass(frozen=True)
class PropertyRef:
    """Identifies a property by IRI and kind."""

    iri: str
    kind: PropertyKind

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.iri}"


class QueryType(str, Enum):
    """Operator applied to a property in a leaf filter.

    Value types compare a property's textual value and need a search string;
    non-value types test for the existence of an annotation or restriction.
    """

    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    EXACT_MATCH = "exact_match"
    PROPERTY_VALUE_PRESENT = "property_value_present"
    PROPERTY_VALUE_ABSENT = "property_value_absent"
    PROPERTY_RESTRICTION_PRESENT = "property_restriction_present"
    PROPERTY_RESTRICTION_ABSENT = "property_restriction_absent"

    @property
    def is_value_type(self) -> bool:
        return self in VALUE_QUERY_TYPES

    @property
    def is_non_value_type(self) -> bool:
        return self in NON_VALUE_QUERY_TYPES


VALUE_QUERY_TYPES: frozenset[QueryType] = frozenset({
    QueryType.CONTAINS,
    QueryType.STARTS_WITH,
    QueryType.ENDS_WITH,
    QueryType.EXACT_MATCH,
})

NON_VALUE_QUERY_TYPES: frozenset[QueryType] = frozenset({
    QueryType.PROPERTY_VALUE_PRESENT,
    QueryType.PROPERTY_VALUE_ABSENT,
    QueryType.PROPERTY_RESTRICTION_PRESENT,
    QueryType.PROPERTY_RESTRICTION_ABSENT,
})


class MatchMode(str, Enum):
    """How a composite query folds its children's results."""

    ALL = "all"  # intersection
    ANY = "any"  # union


class Universe(str, Enum):
    """Cached universe a presence query is limited to or a complement is taken against."""

    ENTITIES = "entities"
    CLASSES = "classes"
