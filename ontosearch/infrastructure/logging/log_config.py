"""Centralized logging configuration.

Applies per-category log levels from Settings so the evaluation trace can be
turned up to DEBUG while SQL statements and HTTP access logs stay quiet.
When stderr is not a terminal the ANSI colors of the evaluation trace are
stripped.

Usage:
    from ontosearch.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import re
import sys

from ontosearch.config import Settings, get_settings


# Settings field → logger names whose level it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_evaluation": [
        "QueryEvaluator",
        "UniverseCache",
        "SearchService",
        "ontosearch.application.services",
    ],
    "log_level_index": [
        "ontosearch.infrastructure.index",
        "ontosearch.infrastructure.database",
    ],
}

_LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


class _PlainFormatter(logging.Formatter):
    """Formatter that drops ANSI color sequences (log files, CI output)."""

    def format(self, record: logging.LogRecord) -> str:
        return _ANSI_ESCAPE.sub("", super().format(record))


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from application settings."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handlers; scripts and tests may not have any
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter_cls = logging.Formatter if sys.stderr.isatty() else _PlainFormatter
        handler.setFormatter(formatter_cls(_LOG_FORMAT))
        root.addHandler(handler)

    levels = {
        field: _parse_level(getattr(settings, field, "INFO"))
        for field in _CATEGORY_MAP
    }
    for field, names in _CATEGORY_MAP.items():
        for name in names:
            logging.getLogger(name).setLevel(levels[field])

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        " ".join(f"{field.removeprefix('log_level_')}={getattr(settings, field)}" for field in _CATEGORY_MAP),
    )


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = logging.getLevelName(raw.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
