"""Save coordinator - busy indicator bracketing one background save.

A double-tap starts a session only when none is active. The indicator is
shown before the save is submitted and hidden when it settles, whichever way
it settles. Double-taps during a save are dropped, not queued.
"""

from __future__ import annotations
from typing import Any, Callable, Optional, Protocol

from .logging import log
from .signals import Signal
from .types import SaveSession, SaveSucceeded, SaveFailed, TaskPriority


class MediaStore(Protocol):
    """Persistent-media save API."""

    def save(self, identifier: str) -> Any: ...


class Runner(Protocol):
    def submit(self, func: Callable[[Any], Any], arg: Any, priority: TaskPriority,
               callback: Callable[[Any, Any, Any], None]) -> None: ...


class SaveCoordinator:
    """Owns busy-indicator visibility for saving the wall on display.

    Subscribe to `visibility` (bool) to render the HUD and to `outcomes`
    (SaveSucceeded | SaveFailed) to confirm or report the save.
    """

    def __init__(self, store: MediaStore, runner: Runner,
                 identifier_for: Callable[[int], str]):
        self.store = store
        self.runner = runner
        self.identifier_for = identifier_for
        self.visibility = Signal("visibility")
        self.outcomes = Signal("save-outcome")
        self._session: Optional[SaveSession] = None

    @property
    def visible(self) -> bool:
        return self._session is not None and self._session.visible

    @property
    def session(self) -> Optional[SaveSession]:
        return self._session

    def on_double_tap(self, target_index: int) -> bool:
        """Start saving the wall at `target_index`. Returns False if ignored."""
        if self._session is not None:
            log(f"[SAVE] Busy with index {self._session.target_index}, ignoring index {target_index}")
            return False

        try:
            identifier = self.identifier_for(target_index)
        except Exception as e:
            log(f"[SAVE][ERR] No wall at index {target_index}: {e!r}")
            self.outcomes.emit(SaveFailed(target_index, None, e))
            return False

        self._session = SaveSession(target_index, identifier)
        self.visibility.emit(True)
        log(f"[SAVE] Saving index {target_index}: {identifier}")

        try:
            self.runner.submit(self.store.save, identifier, TaskPriority.SAVE, self._on_settled)
        except Exception as e:
            self._settle(SaveFailed(target_index, identifier, e))
            return False
        return True

    def abandon(self, error: BaseException) -> None:
        """Fail the session in flight, if any; its completion will never be delivered."""
        if self._session is None:
            return
        self._settle(SaveFailed(self._session.target_index, self._session.identifier, error))

    def _on_settled(self, identifier: str, result: Any, error: Optional[BaseException]) -> None:
        session = self._session
        if session is None:
            return
        if error is not None:
            self._settle(SaveFailed(session.target_index, identifier, error))
        else:
            self._settle(SaveSucceeded(session.target_index, identifier, result))

    def _settle(self, outcome) -> None:
        self._session.visible = False
        self._session = None
        self.visibility.emit(False)
        if isinstance(outcome, SaveFailed):
            log(f"[SAVE][ERR] Index {outcome.target_index} failed: {outcome.error!r}")
        else:
            log(f"[SAVE] Index {outcome.target_index} saved to {outcome.location}")
        self.outcomes.emit(outcome)
