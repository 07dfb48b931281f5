"""Abstract interface (port) for the ontologies under search."""

from abc import ABC, abstractmethod

from ontosearch.domain.entities import OntologySignature


class SearchContext(ABC):
    """Port exposing the loaded ontology collection."""

    @abstractmethod
    def get_ontologies(self) -> list[OntologySignature]:
        """Return the signature of every ontology currently in scope."""
        ...
