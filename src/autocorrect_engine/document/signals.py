"""Change notification plumbing between documents and their listeners."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, List

ChangeCallback = Callable[[object], None]


class ChangeSignal:
    """Minimal signal letting views and the auto-correct engine observe edits."""

    def __init__(self) -> None:
        self._subscribers: List[ChangeCallback] = []

    def connect(self, callback: ChangeCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: ChangeCallback) -> bool:
        if callback not in self._subscribers:
            return False
        self._subscribers.remove(callback)
        return True

    def is_connected(self, callback: ChangeCallback) -> bool:
        return callback in self._subscribers

    def emit(self, payload: object | None = None) -> None:
        # Snapshot: callbacks may connect/disconnect while we iterate.
        for callback in list(self._subscribers):
            if callback in self._subscribers:
                callback(payload)

    @contextmanager
    def blocked(self, callback: ChangeCallback) -> Iterator[None]:
        """Disconnect ``callback`` for the duration of the block.

        The callback is reconnected on every exit path, but only if it was
        connected on entry.
        """

        was_connected = self.disconnect(callback)
        try:
            yield
        finally:
            if was_connected:
                self.connect(callback)

    def __len__(self) -> int:
        return len(self._subscribers)


__all__ = ["ChangeCallback", "ChangeSignal"]
