"""Universe cache — lazily computed complement bases for absence and negation.

Both sets are filled once per cache lifetime and never refreshed: an
ontology loaded after population is not seen until a new cache is built.
"""

import threading

from ontosearch.application.interfaces import SearchContext
from ontosearch.domain.entities import Universe
from ontosearch.infrastructure.logging.colored_logger import EvaluationLogger, EvaluationStage

plog = EvaluationLogger("UniverseCache")


class UniverseCache:
    """Memoized "all entities" and "all classes" sets for one search context.

    ``None`` marks a set as unpopulated, so a legitimately empty universe is
    cached like any other. Population runs under a lock (single writer).
    """

    def __init__(self, search_context: SearchContext):
        self._context = search_context
        self._entities: frozenset[str] | None = None
        self._classes: frozenset[str] | None = None
        self._lock = threading.Lock()

    @property
    def is_populated(self) -> bool:
        return self._entities is not None and self._classes is not None

    def entities(self) -> frozenset[str]:
        """Every entity declared by an ontology in scope."""
        if self._entities is None:
            with self._lock:
                if self._entities is None:
                    self._entities = self._collect(Universe.ENTITIES)
        return self._entities

    def classes(self) -> frozenset[str]:
        """Every class declared by an ontology in scope."""
        if self._classes is None:
            with self._lock:
                if self._classes is None:
                    self._classes = self._collect(Universe.CLASSES)
        return self._classes

    def get(self, universe: Universe) -> frozenset[str]:
        if universe == Universe.CLASSES:
            return self.classes()
        return self.entities()

    def prime(self) -> None:
        """Populate both sets up front, before concurrent readers start."""
        self.entities()
        self.classes()

    def _collect(self, universe: Universe) -> frozenset[str]:
        with plog.timed(EvaluationStage.UNIVERSE, f"Populating {universe.value}"):
            members: set[str] = set()
            ontologies = self._context.get_ontologies()
            for ontology in ontologies:
                if universe == Universe.CLASSES:
                    members.update(ontology.classes)
                else:
                    members.update(ontology.entities)
            plog.stats(universe=universe.value, ontologies=len(ontologies), size=len(members))
        return frozenset(members)
