"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ontosearch.config import get_settings
from ontosearch.domain.exceptions import IndexIOError
from ontosearch.infrastructure.database import Base, engine
from ontosearch.infrastructure.database.session import ensure_sqlite_directory
from ontosearch.infrastructure.dependencies import get_query_factory
from ontosearch.infrastructure.logging.log_config import setup_logging
from ontosearch.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def _prime_universe_cache() -> None:
    """Fill the universe cache before requests start reading it concurrently.

    An unreadable index is not fatal: the cache then fills on first use.
    """
    universe = get_query_factory().universe
    try:
        universe.prime()
    except IndexIOError as exc:
        logger.warning("Could not prime universe cache, populating lazily: %s", exc)
        return
    logger.info(
        "Universe cache primed: %d entities, %d classes",
        len(universe.entities()),
        len(universe.classes()),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create index tables, prime the universe cache."""
    settings = get_settings()
    setup_logging(settings)

    ensure_sqlite_directory(settings.index_database_url)
    Base.metadata.create_all(engine)

    if settings.prime_universe_on_startup:
        _prime_universe_cache()

    yield

    # Shutdown
    engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ontosearch.main:app", host="0.0.0.0", port=8020)
