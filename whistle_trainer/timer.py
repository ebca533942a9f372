"""Fixed-cadence repeating task with a clean stop."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from .logger import get_logger

logger = get_logger(__name__)


class RepeatingTask:
    """Calls a function every ``interval`` seconds on a worker thread.

    Calls are serialized on the one worker thread, so two invocations never
    overlap. When a call overruns, the ticks it covered are skipped rather
    than queued. After ``stop()`` returns the function is not called again.
    """

    def __init__(self, interval: float, function: Callable[[], None], name: str = "repeating-task"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._function = function
        self._name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.skipped_ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> None:
        if self.is_running():
            logger.warning(f"{self._name} already running")
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the task and wait for an in-flight call to finish."""
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return
        # A call to stop() from inside the task cannot join its own thread;
        # the loop exits as soon as the current call returns.
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        next_tick = time.monotonic() + self._interval
        while not self._stop_event.wait(max(0.0, next_tick - time.monotonic())):
            try:
                self._function()
            except Exception:
                logger.exception(f"Error in {self._name}")

            next_tick += self._interval
            now = time.monotonic()
            if now > next_tick:
                missed = int((now - next_tick) // self._interval) + 1
                self.skipped_ticks += missed
                next_tick += missed * self._interval
