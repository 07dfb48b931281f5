"""Colored evaluation trace — ANSI-colored console logging for query trees.

Each evaluated sub-query is logged in its variant's color and indented by its
depth, so a DEBUG trace reads like the query tree being evaluated:

    🧩 [FILTERED] Combining 2 sub-queries (mode=all)
      📄 [BASIC] (+annotation_iri:…#label +annotation_text:cell) (hits=2)
      🔗 [NESTED] 1 holders of …#partOf (fillers=1)

Color scheme:
    Yellow   Basic (leaf index) queries
    Blue     Filtered / user queries
    Magenta  Negated queries
    Cyan     Nested queries
    Green    Universe population / completion
    Red      Errors
    Gray     Details and stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Evaluation Stages ────────────────────────────────────────────────

class EvaluationStage:
    """(label, color, icon) per kind of evaluation step."""

    SEARCH = ("SEARCH", _Colors.WHITE, "🔎")
    BASIC = ("BASIC", _Colors.YELLOW, "📄")
    FILTERED = ("FILTERED", _Colors.BLUE, "🧩")
    NEGATED = ("NEGATED", _Colors.MAGENTA, "🚫")
    NESTED = ("NESTED", _Colors.CYAN, "🔗")
    UNIVERSE = ("UNIVERSE", _Colors.GREEN, "🌐")
    CANCELLED = ("CANCELLED", _Colors.GRAY, "⏹️")
    ERROR = ("ERROR", _Colors.RED, "❌")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


Stage = tuple[str, str, str]


def _details(values: dict[str, Any]) -> str:
    if not values:
        return ""
    joined = " | ".join(f"{key}={value}" for key, value in values.items())
    return f" {_Colors.GRAY}({joined}){_Colors.RESET}"


# ── EvaluationLogger ─────────────────────────────────────────────────

class EvaluationLogger:
    """Color-coded logger for query evaluation.

    Usage:
        plog = EvaluationLogger("QueryEvaluator")
        plog.node(EvaluationStage.NESTED, depth, "2 holders kept", fillers=3)
        plog.outcome(EvaluationStage.COMPLETE, "2 entities matched")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def node(self, stage: Stage, depth: int, message: str, **details: Any) -> None:
        """One evaluated sub-query, indented by its depth in the tree (DEBUG)."""
        if not self._logger.isEnabledFor(logging.DEBUG):
            return
        label, color, icon = stage
        indent = "  " * depth
        self._logger.debug(
            f"{indent}{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}{_details(details)}"
        )

    def outcome(self, stage: Stage, message: str, **details: Any) -> None:
        """Final result of a top-level step (INFO)."""
        label, color, icon = stage
        self._logger.info(
            f"{color}{icon} [{label}]{_Colors.RESET} {message}{_details(details)}"
        )

    def failure(self, stage: Stage, message: str, error: Exception | None = None) -> None:
        label = stage[0]
        text = f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} {_Colors.RED}{message}{_Colors.RESET}"
        if error is not None:
            text += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(text)

    def detail(self, message: str, **details: Any) -> None:
        self._logger.debug(f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}{_details(details)}")

    def stats(self, **values: Any) -> None:
        parts = " | ".join(f"{key}: {value}" for key, value in values.items())
        self._logger.info(f"   {_Colors.GRAY}📈 {parts}{_Colors.RESET}")

    @contextmanager
    def timed(self, stage: Stage, message: str):
        """Log a step's elapsed time on exit, or its failure if it raises."""
        start = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.failure(stage, f"{message} failed after {time.perf_counter() - start:.2f}s", error=exc)
            raise
        self.outcome(stage, message, elapsed=f"{time.perf_counter() - start:.2f}s")
