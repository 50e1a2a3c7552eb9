"""Double-tap detection over the touch-start stream.

`classify` is pure: it takes the previous tap and returns the verdict along
with the memory for the next call. Memory always advances to the event just
seen, even after a double-tap, so a fast triple tap can report two
double-taps. Callers that need one trigger per burst debounce on top.
"""

from __future__ import annotations
from typing import Tuple

from .config import DOUBLE_TAP_DELAY_MS, DOUBLE_TAP_RADIUS
from .logging import log
from .math_utils import distance_squared
from .types import TapMemory, TouchEvent, TouchPhase


def is_double_tap(event: TouchEvent, memory: TapMemory,
                  delay_ms: int = DOUBLE_TAP_DELAY_MS,
                  radius: float = DOUBLE_TAP_RADIUS) -> bool:
    """Check whether `event` completes a double-tap with the remembered tap."""
    if memory.is_empty:
        return False
    dt = event.timestamp_ms - memory.last_timestamp_ms
    if dt >= delay_ms:
        return False
    d2 = distance_squared(memory.last_x, memory.last_y, event.x, event.y)
    return d2 < radius * radius


def classify(event: TouchEvent, memory: TapMemory,
             delay_ms: int = DOUBLE_TAP_DELAY_MS,
             radius: float = DOUBLE_TAP_RADIUS) -> Tuple[bool, TapMemory]:
    """Classify a touch-start. Returns (is_double_tap, new_memory)."""
    return (is_double_tap(event, memory, delay_ms, radius),
            TapMemory.from_event(event))


class GestureClassifier:
    """Threads TapMemory through `classify` for one touch surface."""

    def __init__(self, delay_ms: int = DOUBLE_TAP_DELAY_MS,
                 radius: float = DOUBLE_TAP_RADIUS):
        self.delay_ms = delay_ms
        self.radius = radius
        self.memory: TapMemory = TapMemory.EMPTY

    def on_touch_start(self, event: TouchEvent) -> bool:
        """Classify a touch-start and remember it. Returns True on double-tap."""
        double, self.memory = classify(event, self.memory, self.delay_ms, self.radius)
        if double:
            log(f"[GESTURE] Double-tap at ({event.x:.0f}, {event.y:.0f}) t={event.timestamp_ms}")
        return double

    def on_touch_end(self, event: TouchEvent) -> None:
        # Releases never take part in classification
        log(f"[GESTURE] Touch released at ({event.x:.0f}, {event.y:.0f})")

    def handle(self, phase: TouchPhase, event: TouchEvent) -> bool:
        """Dispatch an event from the gesture source by phase."""
        if phase is TouchPhase.START:
            return self.on_touch_start(event)
        self.on_touch_end(event)
        return False

    def reset(self) -> None:
        """Forget the previous tap."""
        self.memory = TapMemory.EMPTY
