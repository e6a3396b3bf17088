import sys
from typing import Optional, TextIO


class StageReporter:
    """Prints one operator-facing line per stage, optionally prefixed with a marker."""

    OK_MARKER = "✅"
    FAIL_MARKER = "❌"

    def __init__(self, markers: bool = True, stream: Optional[TextIO] = None) -> None:
        self.markers = markers
        self.stream = stream

    def _emit(self, marker: str, message: str) -> None:
        line = f"{marker} {message}" if self.markers else message
        print(line, file=self.stream or sys.stdout)

    def success(self, message: str) -> None:
        self._emit(self.OK_MARKER, message)

    def failure(self, message: str) -> None:
        self._emit(self.FAIL_MARKER, message)
