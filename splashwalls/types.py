"""Core data types for SplashWalls."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Union
from enum import Enum, IntEnum, auto


@dataclass(frozen=True)
class ImageRecord:
    """One entry of the remote image list."""
    id: int
    width: int
    height: int
    author: str
    source: Optional[str] = None  # Local path when not served remotely


@dataclass(frozen=True)
class SampleRequest:
    """How many unique integers to draw from [range_start, range_end)."""
    count: int
    range_start: int
    range_end: int

    @property
    def span(self) -> int:
        """Number of distinct values the range can supply."""
        return self.range_end - self.range_start


class TouchPhase(Enum):
    """Lifecycle point of a touch delivered by the gesture source."""
    START = auto()
    END = auto()


@dataclass(frozen=True)
class TouchEvent:
    """A touch observation in screen coordinates."""
    x: float
    y: float
    timestamp_ms: int


@dataclass(frozen=True)
class TapMemory:
    """The previous touch-start seen by the gesture classifier."""
    last_x: float = 0.0
    last_y: float = 0.0
    last_timestamp_ms: Optional[int] = None  # None = no previous tap

    EMPTY: ClassVar["TapMemory"]

    @property
    def is_empty(self) -> bool:
        return self.last_timestamp_ms is None

    @classmethod
    def from_event(cls, event: TouchEvent) -> TapMemory:
        return cls(event.x, event.y, event.timestamp_ms)


TapMemory.EMPTY = TapMemory()


@dataclass
class SaveSession:
    """A single in-flight save, discarded once it settles."""
    target_index: int
    identifier: str
    visible: bool = True


@dataclass(frozen=True)
class SaveSucceeded:
    target_index: int
    identifier: str
    location: Any = None  # Whatever the media store reports back


@dataclass(frozen=True)
class SaveFailed:
    target_index: int
    identifier: Optional[str]
    error: BaseException


SaveOutcome = Union[SaveSucceeded, SaveFailed]


@dataclass(frozen=True)
class LoadSucceeded:
    """A refresh finished and these walls are on display."""
    walls: tuple
    picked: tuple  # Sampled indices into the full list, in draw order
    total: int


@dataclass(frozen=True)
class LoadFailed:
    error: BaseException


LoadOutcome = Union[LoadSucceeded, LoadFailed]


class TaskPriority(IntEnum):
    """Priority levels for background tasks."""
    SAVE = 0    # User-initiated save - highest priority
    FETCH = 1   # Image list refresh


@dataclass
class Task:
    """A unit of work for the task runner."""
    func: Callable
    arg: Any
    priority: TaskPriority
    callback: Callable
    timestamp: float = 0.0

    def __lt__(self, other: Task) -> bool:
        """Compare tasks for priority queue ordering."""
        if self.priority != other.priority:
            return self.priority < other.priority
        return self.timestamp < other.timestamp


@dataclass
class UIEvent:
    """An event to be processed on the main/UI thread."""
    callback: Callable
    args: tuple
