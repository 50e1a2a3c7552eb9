"""Composite AppState - combines the sub-states the shell reads."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .walls import WallListState
from .loading import LoadingState
from ..types import ImageRecord


@dataclass
class AppState:
    """
    Composite application state.

    Sub-states can be used directly:
        state.walls.index
        state.loading.generation

    Flat accessors cover what the shell renders:
        state.current_index
        state.is_loading
    """
    walls: WallListState = field(default_factory=WallListState)
    loading: LoadingState = field(default_factory=LoadingState)
    hud_visible: bool = False

    @property
    def current_index(self) -> int:
        return self.walls.index

    @current_index.setter
    def current_index(self, value: int):
        self.walls.index = value

    @property
    def is_loading(self) -> bool:
        return self.loading.is_loading

    @property
    def wall_list(self) -> List[ImageRecord]:
        return self.walls.walls

    @property
    def current_wall(self) -> Optional[ImageRecord]:
        return self.walls.current
