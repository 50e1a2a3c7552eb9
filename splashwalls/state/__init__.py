"""State management submodules for SplashWalls."""

from .walls import WallListState
from .loading import LoadingState
from .app_state import AppState

__all__ = [
    'WallListState',
    'LoadingState',
    'AppState',
]
