"""Domain entities for search outcomes."""

from dataclasses import dataclass, field
from enum import Enum


class SearchStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class SearchOutcome:
    """Result of evaluating one query tree.

    A cancelled outcome carries no entities; it must not be read as
    "nothing matched".
    """

    status: SearchStatus
    entities: frozenset[str] = field(default_factory=frozenset)
    completed_queries: int = 0
    duration_ms: int = 0

    @property
    def cancelled(self) -> bool:
        return self.status == SearchStatus.CANCELLED

    @property
    def total(self) -> int:
        return len(self.entities)
