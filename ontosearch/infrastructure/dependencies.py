"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ontosearch.config import get_settings
from ontosearch.application.services import QueryFactory, SearchService
from ontosearch.infrastructure.database.session import get_db_session, session_factory
from ontosearch.infrastructure.database.repositories import (
    SQLAlchemyIndexSearcher,
    SQLAlchemySearchContext,
)


@lru_cache
def get_query_factory() -> QueryFactory:
    """Process-wide factory; its universe cache lives as long as the app."""
    return QueryFactory(SQLAlchemySearchContext(session_factory))


def get_search_service(
    session: Session = Depends(get_db_session),
    factory: QueryFactory = Depends(get_query_factory),
) -> Generator[SearchService, None, None]:
    """Provides a SearchService reading the index through the request's session."""
    settings = get_settings()
    yield SearchService(
        factory,
        SQLAlchemyIndexSearcher(session),
        timeout_seconds=settings.query_timeout_seconds or None,
    )
