"""Pure math utilities - no external dependencies."""

from __future__ import annotations


def distance_squared(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared distance between two points (avoids sqrt for comparisons)."""
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy
