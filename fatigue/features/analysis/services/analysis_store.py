"""
Holder for the currently published analysis.

A new upload replaces the previous result as one reference swap under a
lock. Readers get either the old or the new snapshot, never a mix.
"""

import threading

from fatigue.features.analysis.domain import AnalysisResult
from fatigue.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class NoAnalysisError(Exception):
    """Raised when results are requested before any file was analysed."""

    def __init__(self, message: str = "No analysis available. Upload a CSV file first."):
        super().__init__(message)
        self.message = message


class AnalysisStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._result: AnalysisResult | None = None

    def publish(self, result: AnalysisResult) -> AnalysisResult | None:
        """Swap in ``result`` and return whatever it replaced."""
        with self._lock:
            previous, self._result = self._result, result

        logger.info(
            "Analysis published",
            filename=result.file_info.name,
            replaced=previous is not None,
            users=len(result.users),
            messages=len(result.messages),
        )
        return previous

    def current(self) -> AnalysisResult:
        with self._lock:
            result = self._result
        if result is None:
            raise NoAnalysisError()
        return result

    def peek(self) -> AnalysisResult | None:
        with self._lock:
            return self._result

    def clear(self) -> None:
        with self._lock:
            self._result = None


analysis_store = AnalysisStore()
