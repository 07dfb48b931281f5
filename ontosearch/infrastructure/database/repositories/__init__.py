from .index_repository import SQLAlchemyIndexSearcher
from .ontology_repository import SQLAlchemySearchContext

__all__ = [
    "SQLAlchemyIndexSearcher",
    "SQLAlchemySearchContext",
]
