"""Subscribable callback lists used to publish state to the shell."""

from __future__ import annotations
from typing import Callable, List

from .logging import log


class Signal:
    """A named list of subscribers called in subscription order."""

    def __init__(self, name: str):
        self.name = name
        self._subscribers: List[Callable] = []

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        """Register a callback. Returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, *args) -> None:
        """Call every subscriber; a failing subscriber does not stop the rest."""
        for callback in list(self._subscribers):
            try:
                callback(*args)
            except Exception as e:
                log(f"[SIGNAL][ERR] {self.name}: {e!r}")

    def __len__(self) -> int:
        return len(self._subscribers)
