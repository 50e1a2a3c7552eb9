"""
Unit tests for double-tap classification.
"""

import pytest

from splashwalls.config import DOUBLE_TAP_DELAY_MS, DOUBLE_TAP_RADIUS
from splashwalls.gestures import GestureClassifier, classify, is_double_tap
from splashwalls.types import TapMemory, TouchEvent, TouchPhase


def tap(x, y, t):
    return TouchEvent(x=x, y=y, timestamp_ms=t)


class TestClassify:
    """Tests for the pure classify function."""

    def test_same_spot_within_delay_is_double(self):
        _, memory = classify(tap(10, 10, 0), TapMemory.EMPTY)

        double, _ = classify(tap(10, 10, 200), memory)

        assert double is True

    def test_too_slow_is_not_double(self):
        _, memory = classify(tap(10, 10, 0), TapMemory.EMPTY)

        double, _ = classify(tap(10, 10, 400), memory)

        assert double is False

    def test_too_far_is_not_double(self):
        _, memory = classify(tap(0, 0, 0), TapMemory.EMPTY)

        double, _ = classify(tap(25, 0, 100), memory)

        assert double is False

    def test_thresholds_are_exclusive(self):
        """A gap of exactly the delay, or exactly the radius apart, does not count."""
        memory = TapMemory(0, 0, 0)

        assert not is_double_tap(tap(0, 0, DOUBLE_TAP_DELAY_MS), memory)
        assert not is_double_tap(tap(DOUBLE_TAP_RADIUS, 0, 10), memory)
        assert is_double_tap(tap(DOUBLE_TAP_RADIUS - 0.5, 0, DOUBLE_TAP_DELAY_MS - 1), memory)

    def test_distance_is_euclidean(self):
        """(12, 16) is 20 away from the origin even though each axis is under 20."""
        memory = TapMemory(0, 0, 0)

        assert not is_double_tap(tap(12, 16, 50), memory)
        assert is_double_tap(tap(11, 16, 50), memory)

    def test_empty_memory_never_double(self):
        double, _ = classify(tap(0, 0, 0), TapMemory.EMPTY)

        assert double is False

    @pytest.mark.parametrize("event", [
        tap(10, 10, 200),
        tap(10, 10, 5000),
        tap(300, 40, 100),
    ])
    def test_memory_always_takes_current_event(self, event):
        """New memory equals the processed event whatever the verdict."""
        _, memory = classify(event, TapMemory(10, 10, 0))

        assert memory == TapMemory(event.x, event.y, event.timestamp_ms)

    def test_custom_thresholds(self):
        memory = TapMemory(0, 0, 0)

        double, _ = classify(tap(30, 0, 450), memory, delay_ms=500, radius=40)

        assert double is True

    def test_input_memory_untouched(self):
        memory = TapMemory(1, 2, 3)

        classify(tap(5, 5, 10), memory)

        assert memory == TapMemory(1, 2, 3)


class TestGestureClassifier:
    """Tests for the stateful GestureClassifier wrapper."""

    def test_double_tap_then_slow_tap(self):
        classifier = GestureClassifier()

        assert classifier.on_touch_start(tap(50, 50, 1000)) is False
        assert classifier.on_touch_start(tap(52, 49, 1150)) is True
        assert classifier.on_touch_start(tap(52, 49, 2000)) is False

    def test_fast_triple_tap_reports_two_double_taps(self):
        """Memory advances after a double-tap, so tap 3 pairs with tap 2."""
        classifier = GestureClassifier()

        results = [
            classifier.on_touch_start(tap(10, 10, 0)),
            classifier.on_touch_start(tap(10, 10, 150)),
            classifier.on_touch_start(tap(10, 10, 300)),
        ]

        assert results == [False, True, True]

    def test_triple_tap_with_slow_third(self):
        classifier = GestureClassifier()

        classifier.on_touch_start(tap(10, 10, 0))
        classifier.on_touch_start(tap(10, 10, 250))

        assert classifier.on_touch_start(tap(10, 10, 550)) is False

    def test_touch_end_does_not_participate(self):
        classifier = GestureClassifier()
        classifier.on_touch_start(tap(10, 10, 0))

        assert classifier.handle(TouchPhase.END, tap(10, 10, 50)) is False
        assert classifier.memory == TapMemory(10, 10, 0)
        assert classifier.handle(TouchPhase.START, tap(10, 10, 100)) is True

    def test_reset_forgets_previous_tap(self):
        classifier = GestureClassifier()
        classifier.on_touch_start(tap(10, 10, 0))

        classifier.reset()

        assert classifier.memory.is_empty
        assert classifier.on_touch_start(tap(10, 10, 100)) is False

    def test_touch_end_is_logged(self, capsys):
        classifier = GestureClassifier()

        classifier.handle(TouchPhase.END, tap(12, 34, 50))

        assert "[GESTURE] Touch released at (12, 34)" in capsys.readouterr().out
