"""SQLAlchemy engine and session configuration for the index store."""

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ontosearch.config import get_settings

_SQLITE_PREFIX = "sqlite:///"


def ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    if url.startswith(_SQLITE_PREFIX) and ":memory:" not in url:
        Path(url[len(_SQLITE_PREFIX):]).parent.mkdir(parents=True, exist_ok=True)


def create_index_engine(url: str, *, echo: bool = False) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, future=True, connect_args=connect_args)


settings = get_settings()

engine = create_index_engine(settings.index_database_url, echo=settings.index_echo_sql)

session_factory = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
)


def get_db_session() -> Generator[Session, None, None]:
    """FastAPI dependency — yields a DB session per request."""
    with session_factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
