import threading
import time
from typing import Callable, List

from .display import Display


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class Transcript:
    """
    Append-only operator log with a visible window.

    Entries are never deleted: clearing the display only moves the visible
    offset to the end of the buffer, and resetting moves it back to 0.
    """

    def __init__(self, clock: Callable[[], int] = epoch_millis):
        self._clock = clock
        self._chunks: List[str] = []
        self._length = 0
        self._visible_offset = 0
        self._lock = threading.Lock()
        self._render_lock = threading.Lock()

    def append(self, line: str, with_newline: bool = True) -> str:
        """Appends a timestamped entry and returns it as stored"""
        entry = f"{self.timestamp()} {line}"
        if with_newline:
            entry += "\n"

        with self._lock:
            self._chunks.append(entry)
            self._length += len(entry)

        return entry

    def timestamp(self) -> str:
        return f"[{self._clock()}]"

    def content(self) -> str:
        with self._lock:
            return self._join()

    def visible_content(self) -> str:
        with self._lock:
            return self._join()[self._visible_offset:]

    def render(self, display: Display) -> None:
        """Shows the visible window. Snapshots reach the display in the order they were taken"""
        with self._render_lock:
            display.show_text(self.visible_content())

    @property
    def visible_offset(self) -> int:
        with self._lock:
            return self._visible_offset

    def hide_history(self) -> None:
        with self._lock:
            self._visible_offset = self._length

    def reveal_history(self) -> None:
        with self._lock:
            self._visible_offset = 0

    def __len__(self) -> int:
        with self._lock:
            return self._length

    def _join(self) -> str:
        if len(self._chunks) > 1:
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""
