"""Exception types raised by SplashWalls."""

from __future__ import annotations


class SplashWallsError(Exception):
    """Base class for all package errors."""


class InsufficientRange(SplashWallsError, ValueError):
    """More unique values were requested than the range can supply."""

    def __init__(self, count: int, available: int):
        self.count = count
        self.available = available
        super().__init__(
            f"cannot draw {count} unique values from a range of {available}"
        )


class MediaStoreError(SplashWallsError):
    """Saving into the media store failed."""


class ImageListError(SplashWallsError):
    """The image list provider could not produce a list."""
