"""Wall list state - the sampled records on display and the current index."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from ..types import ImageRecord


@dataclass
class WallListState:
    """State for the walls shown in the carousel."""
    walls: List[ImageRecord] = field(default_factory=list)
    index: int = 0

    @property
    def count(self) -> int:
        """Total number of walls."""
        return len(self.walls)

    @property
    def current(self) -> Optional[ImageRecord]:
        """Get the wall on display or None."""
        return self.get(self.index)

    def get(self, idx: int) -> Optional[ImageRecord]:
        """Get wall at index or None."""
        if 0 <= idx < len(self.walls):
            return self.walls[idx]
        return None

    def clamp_index(self, idx: int) -> int:
        """Clamp index to valid range."""
        if len(self.walls) == 0:
            return 0
        return max(0, min(idx, len(self.walls) - 1))

    def replace(self, walls: List[ImageRecord]) -> None:
        """Show a new set of walls starting from the first."""
        self.walls = list(walls)
        self.index = 0

    def clear(self) -> None:
        self.walls = []
        self.index = 0
