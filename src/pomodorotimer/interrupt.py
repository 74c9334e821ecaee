"""Ctrl+C handling that runs alongside the session loop."""
from __future__ import annotations

import logging
import os
import signal
import sys
import threading
from typing import Callable, Optional

from . import scheduler
from .clock import Clock
from .session import Screen

logger = logging.getLogger(__name__)


def exit_process() -> None:
    sys.stdout.flush()
    os._exit(0)


class InterruptHandler:
    """Waits on a background thread for SIGINT, then summarises and exits.

    The signal handler itself only sets an event; the listener thread reads
    the shared state, prints the summary and calls ``terminate``. It fires at
    most once.
    """

    def __init__(
        self,
        state: scheduler.SessionState,
        screen: Screen,
        clock: Clock,
        terminate: Callable[[], None] = exit_process,
    ) -> None:
        self.state = state
        self.screen = screen
        self.clock = clock
        self.terminate = terminate
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._fired = False
        self._stopped = False
        self._thread: Optional[threading.Thread] = None
        self._previous_handler = None

    @property
    def fired(self) -> bool:
        return self._fired

    def install(self) -> None:
        """Start the listener and route SIGINT to it. Call from the main thread."""
        self._thread = threading.Thread(target=self._listen, name="interrupt-listener", daemon=True)
        self._thread.start()
        self._previous_handler = signal.signal(signal.SIGINT, self._on_signal)

    def uninstall(self) -> None:
        """Restore the previous SIGINT handler and release the listener."""
        if self._previous_handler is not None:
            signal.signal(signal.SIGINT, self._previous_handler)
            self._previous_handler = None
        self._stopped = True
        self._event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def request(self) -> None:
        """Ask the listener to fire, as a SIGINT would."""
        self._event.set()

    def _on_signal(self, signum, frame) -> None:
        self.request()

    def _listen(self) -> None:
        self._event.wait()
        if not self._stopped:
            self.fire()

    def fire(self) -> Optional[int]:
        """Summarise the session and terminate. Later calls do nothing."""
        with self._lock:
            if self._fired:
                return None
            self._fired = True
        finished = self.state.finished()
        logger.info("Interrupted with %d pomodoro(s) finished", finished)
        self.screen.summary(finished, self.clock.now() - self.state.start_time)
        self.terminate()
        return finished
