"""Logging utilities with timing and tick tracking."""

from __future__ import annotations
import sys
import time
from typing import Optional


class Logger:
    """Application logger with timestamps and tick counts."""

    def __init__(self):
        self._start_time: float = time.perf_counter()
        self._tick: int = 0

    @property
    def tick(self) -> int:
        """Current main-loop tick."""
        return self._tick

    def increment_tick(self) -> None:
        """Increment tick counter."""
        self._tick += 1

    @property
    def elapsed(self) -> float:
        """Seconds since logger was created."""
        return time.perf_counter() - self._start_time

    def log(self, msg: str) -> None:
        """Log a message with timestamp and tick number."""
        line = f"[{self.elapsed:7.3f}s T{self._tick:06d}] {msg}\n"
        try:
            sys.stdout.write(line)
            sys.stdout.flush()
        except Exception:
            try:
                sys.stderr.write(line)
                sys.stderr.flush()
            except Exception:
                pass

    def __call__(self, msg: str) -> None:
        """Shorthand for log()."""
        self.log(msg)


# Global logger instance
_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def log(msg: str) -> None:
    """Log a message using the global logger."""
    get_logger().log(msg)


def get_tick() -> int:
    """Get current tick count."""
    return get_logger().tick


def increment_tick() -> None:
    """Increment tick counter."""
    get_logger().increment_tick()


# Time utilities
def now() -> float:
    """Get current time in seconds (high precision)."""
    return time.perf_counter()
