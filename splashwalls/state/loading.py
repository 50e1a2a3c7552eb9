"""Loading state - refresh coordination."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class LoadingState:
    """Tracks the list fetch in flight.

    Each refresh bumps `generation`; a completion carrying an older
    generation belongs to a superseded refresh and must be dropped.
    """
    is_loading: bool = False
    generation: int = 0

    def begin(self) -> int:
        """Start a refresh and return its generation."""
        self.generation += 1
        self.is_loading = True
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def finish(self) -> None:
        self.is_loading = False
