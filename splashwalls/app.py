"""Application - lifecycle orchestrator for the wall picker.

The Application wires the collaborators the shell hands it:
- Touch source -> GestureClassifier -> SaveCoordinator
- Shake source -> refresh
- Image list provider (background) -> Sampler -> wall list

Completions from background work are only delivered from `pump()`, which the
shell calls from its UI loop.
"""

from __future__ import annotations
import argparse
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol

from .config import NUM_WALLPAPERS, MEDIA_DIR, SAVED_MESSAGE, SAVED_TITLE, UI_EVENTS_PER_TICK
from .errors import ImageListError, InsufficientRange
from .gestures import GestureClassifier
from .logging import log, now, increment_tick, get_tick
from .media import DirectoryMediaStore
from .providers import DirectoryImageProvider, ImageProvider, display_url
from .sampler import Sampler
from .saving import MediaStore, SaveCoordinator
from .signals import Signal
from .state import AppState
from .tasks import TaskRunner
from .types import LoadFailed, LoadSucceeded, SaveSucceeded, TaskPriority, TouchEvent, TouchPhase


class EventSource(Protocol):
    """Something the shell can subscribe to; subscribe returns an unsubscribe callable."""

    def subscribe(self, callback: Callable[..., Any]) -> Callable[[], None]: ...


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application(provider, store)
        app.initialize(touch_source, shake_source)
        while running:
            app.pump()
        app.teardown()
    """

    provider: ImageProvider
    store: MediaStore
    runner: TaskRunner = field(default_factory=TaskRunner)
    sampler: Sampler = field(default_factory=Sampler)
    classifier: GestureClassifier = field(default_factory=GestureClassifier)
    state: AppState = field(default_factory=AppState)
    count: int = NUM_WALLPAPERS

    coordinator: SaveCoordinator = field(init=False)
    loads: Signal = field(init=False)
    initialized: bool = field(default=False, init=False)
    _unsubscribers: List[Callable[[], None]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self.coordinator = SaveCoordinator(self.store, self.runner, self.identifier_for)
        self.coordinator.visibility.subscribe(self._on_hud_visibility)
        self.loads = Signal("loads")

    # ═══════════════════════════════════════════════════════════════════════
    # Lifecycle
    # ═══════════════════════════════════════════════════════════════════════

    def initialize(self, touch_source: Optional[EventSource] = None,
                   shake_source: Optional[EventSource] = None) -> None:
        """Subscribe to input sources, then start the first refresh."""
        if self.initialized:
            raise RuntimeError("application already initialized")
        if touch_source is not None:
            self._unsubscribers.append(touch_source.subscribe(self.on_touch))
        if shake_source is not None:
            self._unsubscribers.append(shake_source.subscribe(self.on_shake))
        self.initialized = True
        log(f"[APP] Initialized with {len(self._unsubscribers)} input sources")
        self.refresh()

    def teardown(self) -> None:
        """Unsubscribe from every source, then stop background work."""
        log("[APP] Starting teardown")
        while self._unsubscribers:
            unsubscribe = self._unsubscribers.pop()
            unsubscribe()
        self.runner.shutdown()
        self.coordinator.abandon(RuntimeError("application torn down before the save finished"))
        self.initialized = False
        log(f"[APP] Teardown complete after {get_tick()} ticks")

    def pump(self, max_events: int = UI_EVENTS_PER_TICK) -> int:
        """Deliver pending background completions. Call once per UI tick."""
        delivered = self.runner.poll_ui_events(max_events)
        increment_tick()
        return delivered

    # ═══════════════════════════════════════════════════════════════════════
    # Refresh
    # ═══════════════════════════════════════════════════════════════════════

    def refresh(self) -> None:
        """Drop the walls on display and fetch a fresh random set."""
        self.state.walls.clear()
        generation = self.state.loading.begin()
        log(f"[APP] Refresh #{generation} started")
        try:
            self.runner.submit(self._fetch, generation, TaskPriority.FETCH, self._on_fetched)
        except Exception as e:
            self.state.loading.finish()
            log(f"[APP][ERR] Refresh #{generation} could not start: {e!r}")
            self.loads.emit(LoadFailed(e))

    def _fetch(self, generation: int) -> list:
        # Runs on a worker thread
        try:
            return list(self.provider.fetch())
        except ImageListError:
            raise
        except Exception as e:
            raise ImageListError(f"image list fetch failed: {e!r}") from e

    def _on_fetched(self, generation: int, records: Optional[list],
                    error: Optional[BaseException]) -> None:
        if not self.state.loading.is_current(generation):
            log(f"[APP] Dropping result of superseded refresh #{generation}")
            return
        self.state.loading.finish()

        if error is not None:
            log(f"[APP][ERR] Refresh #{generation} failed: {error!r}")
            self.loads.emit(LoadFailed(error))
            return

        try:
            picked = self.sampler.sample(self.count, 0, len(records))
        except InsufficientRange as e:
            log(f"[APP][ERR] Refresh #{generation}: {e}")
            self.loads.emit(LoadFailed(e))
            return

        walls = [records[i] for i in picked]
        self.state.walls.replace(walls)
        log(f"[APP] Refresh #{generation} showing {len(walls)} of {len(records)} walls")
        self.loads.emit(LoadSucceeded(tuple(walls), picked, len(records)))

    # ═══════════════════════════════════════════════════════════════════════
    # Input
    # ═══════════════════════════════════════════════════════════════════════

    def on_touch(self, phase: TouchPhase, event: TouchEvent) -> bool:
        """Feed one touch from the gesture source. Returns True if a save started."""
        if not self.classifier.handle(phase, event):
            return False
        return self.coordinator.on_double_tap(self.state.current_index)

    def on_shake(self, *args) -> None:
        log("[APP] Shake detected")
        self.refresh()

    def on_scroll_settled(self, index: int) -> None:
        """Carousel came to rest on `index`."""
        self.state.current_index = self.state.walls.clamp_index(index)

    def identifier_for(self, index: int) -> str:
        """Save identifier of the wall at `index`."""
        wall = self.state.walls.get(index)
        if wall is None:
            raise IndexError(f"no wall at index {index} ({self.state.walls.count} on display)")
        return display_url(wall)

    def _on_hud_visibility(self, visible: bool) -> None:
        self.state.hud_visible = visible

    @property
    def hud_visible(self) -> bool:
        return self.coordinator.visible


# ═══════════════════════════════════════════════════════════════════════════
# Command line
# ═══════════════════════════════════════════════════════════════════════════

def _pump_until(app: Application, done: Callable[[], bool], timeout_s: float) -> bool:
    deadline = now() + timeout_s
    while not done():
        if now() > deadline:
            return False
        if app.pump() == 0:
            time.sleep(0.01)
    return True


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="splashwalls",
                                     description="Pick random walls from a folder and save one.")
    parser.add_argument("source", help="Folder of images to pick from")
    parser.add_argument("--media", default=MEDIA_DIR, help="Folder saved walls are written to")
    parser.add_argument("--count", type=int, default=NUM_WALLPAPERS, help="Number of walls to pick")
    parser.add_argument("--save", type=int, default=None, metavar="INDEX",
                        help="Save the pick at INDEX into the media folder")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for each step")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    log(f"[MAIN] Picking {args.count} walls from {args.source}")

    app = Application(
        provider=DirectoryImageProvider(args.source),
        store=DirectoryMediaStore(args.media),
        count=args.count,
    )
    results = {}
    app.loads.subscribe(lambda outcome: results.setdefault("load", outcome))
    app.coordinator.outcomes.subscribe(lambda outcome: results.setdefault("save", outcome))

    try:
        app.initialize()
        if not _pump_until(app, lambda: "load" in results, args.timeout):
            log("[MAIN][ERR] Timed out waiting for the image list")
            return 1
        loaded = results["load"]
        if isinstance(loaded, LoadFailed):
            log(f"[MAIN][ERR] {loaded.error}")
            return 1
        for i, wall in enumerate(loaded.walls):
            log(f"[MAIN] #{i} {wall.author} {wall.width}x{wall.height} {display_url(wall)}")

        if args.save is None:
            return 0

        app.coordinator.on_double_tap(args.save)
        if not _pump_until(app, lambda: "save" in results, args.timeout):
            log("[MAIN][ERR] Timed out waiting for the save")
            return 1
        saved = results["save"]
        if not isinstance(saved, SaveSucceeded):
            log(f"[MAIN][ERR] Save failed: {saved.error}")
            return 1
        log(f"[MAIN] {SAVED_TITLE}: {SAVED_MESSAGE} ({saved.location})")
        return 0
    finally:
        app.teardown()
