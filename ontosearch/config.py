from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Ontology Search API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Inverted index store (built by the indexer, read-only here)
    index_database_url: str = "sqlite:///data/index.db"
    index_echo_sql: bool = False

    # Evaluation
    query_timeout_seconds: float = 30.0      # 0 disables the deadline
    prime_universe_on_startup: bool = True   # fill the universe cache before serving

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_evaluation: str = "INFO"       # QueryEvaluator / SearchService
    log_level_index: str = "INFO"            # index adapters

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
