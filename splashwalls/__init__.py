"""SplashWalls - random wallpaper picker core."""

from .app import Application
from .errors import InsufficientRange, MediaStoreError, ImageListError, SplashWallsError
from .gestures import GestureClassifier, classify
from .sampler import Sampler, sample
from .saving import SaveCoordinator

__all__ = [
    'Application',
    'GestureClassifier',
    'classify',
    'Sampler',
    'sample',
    'SaveCoordinator',
    'InsufficientRange',
    'MediaStoreError',
    'ImageListError',
    'SplashWallsError',
]
