"""Stock progress listeners."""

import threading
import time

from ontosearch.application.interfaces import SearchProgressListener
from ontosearch.domain.entities import SearchPluginQuery


class NullProgressListener(SearchProgressListener):
    """Never cancels, ignores progress."""

    def is_cancelled(self) -> bool:
        return False


class CancellableProgressListener(SearchProgressListener):
    """Listener cancelled explicitly via ``cancel()`` or once a deadline passes.

    Counts finished sub-queries so callers can report progress.
    """

    def __init__(self, timeout_seconds: float | None = None):
        self._cancelled = threading.Event()
        self._deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds else None
        )
        self.started = 0
        self.finished = 0

    def cancel(self) -> None:
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._cancelled.set()
        return self._cancelled.is_set()

    def on_query_started(self, query: SearchPluginQuery, depth: int) -> None:
        self.started += 1

    def on_query_finished(self, query: SearchPluginQuery, depth: int, result_size: int) -> None:
        self.finished += 1
