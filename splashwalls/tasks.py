"""Background task runner with main-thread completion delivery.

Work runs on daemon worker threads. Completions are queued as UI events and
only run when the main loop calls `poll_ui_events`, so every callback sees
the same thread that handles touches.
"""

from __future__ import annotations
from collections import deque
from queue import PriorityQueue, Empty
from threading import Thread, Lock
from typing import Any, Callable, Deque, List

from .config import TASK_WORKERS, UI_EVENTS_PER_TICK, WORKER_POLL_TIMEOUT_S, WORKER_JOIN_TIMEOUT_S
from .logging import log, now
from .types import Task, TaskPriority, UIEvent


class TaskRunner:
    def __init__(self, workers: int = TASK_WORKERS):
        self.task_queue: PriorityQueue = PriorityQueue()
        self.running = True
        self.ui_events: Deque[UIEvent] = deque()
        self.ui_lock = Lock()
        self.workers: List[Thread] = []
        self._in_flight = 0

        for i in range(workers):
            worker = Thread(target=self._worker_loop, name=f"splashwalls-worker-{i}", daemon=True)
            worker.start()
            self.workers.append(worker)

    def _worker_loop(self):
        while self.running:
            try:
                task = self.task_queue.get(timeout=WORKER_POLL_TIMEOUT_S)
            except Empty:
                continue

            result = None
            error = None

            try:
                result = task.func(task.arg)
            except Exception as e:
                error = e

            self._push_ui_event(task.callback, (task.arg, result, error))
            self.task_queue.task_done()

    def _push_ui_event(self, callback: Callable, args: tuple):
        with self.ui_lock:
            self.ui_events.append(UIEvent(callback, args))

    def poll_ui_events(self, max_events: int = UI_EVENTS_PER_TICK) -> int:
        """Run up to `max_events` completions on the calling thread. Returns count run."""
        events_to_process = []
        with self.ui_lock:
            while self.ui_events and len(events_to_process) < max_events:
                events_to_process.append(self.ui_events.popleft())
            self._in_flight -= len(events_to_process)

        for event in events_to_process:
            try:
                event.callback(*event.args)
            except Exception as e:
                log(f"[UI_EVENT][ERR] {e!r}")
        return len(events_to_process)

    def submit(self, func: Callable[[Any], Any], arg: Any, priority: TaskPriority,
               callback: Callable[[Any, Any, Any], None]) -> None:
        """Run `func(arg)` in the background; `callback(arg, result, error)` runs on poll."""
        if not self.running:
            raise RuntimeError("task runner is shut down")
        with self.ui_lock:
            self._in_flight += 1
        self.task_queue.put(Task(func, arg, priority, callback, now()))

    @property
    def pending(self) -> int:
        """Tasks submitted whose completion has not been delivered yet."""
        with self.ui_lock:
            return self._in_flight

    def shutdown(self):
        if not self.running:
            return
        log(f"[TASKS] Shutting down {len(self.workers)} workers")
        self.running = False
        for worker in self.workers:
            worker.join(timeout=WORKER_JOIN_TIMEOUT_S)
