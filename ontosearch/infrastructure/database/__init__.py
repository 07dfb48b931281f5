from .base import Base
from .session import engine, session_factory, get_db_session
from .models import IndexDocumentModel, IndexFieldModel, OntologyModel, OntologyEntityModel

__all__ = [
    "Base",
    "engine",
    "session_factory",
    "get_db_session",
    "IndexDocumentModel",
    "IndexFieldModel",
    "OntologyModel",
    "OntologyEntityModel",
]
