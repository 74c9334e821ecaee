"""Pomodoro configuration and session bookkeeping."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Tuple

FOCUS_LABEL = "Pomodoro"
REST_LABEL = "Rest Period"

DEFAULTS = {
    "length": 25.0,
    "rest": 5.0,
    "iterations": 0,
}


@dataclass(frozen=True)
class Configuration:
    """Durations (in seconds) and the number of cycles to run."""

    focus_seconds: float
    rest_seconds: float
    max_iterations: int = 0

    @property
    def unbounded(self) -> bool:
        return self.max_iterations == 0


@dataclass(frozen=True)
class Phase:
    """One focus or rest interval, built fresh for every run."""

    label: str
    iteration: int
    duration_seconds: float


def build_config(
    *,
    length_minutes: float = DEFAULTS["length"],
    rest_minutes: float = DEFAULTS["rest"],
    iterations: int = DEFAULTS["iterations"],
    fast: bool = False,
) -> Configuration:
    """Create a validated configuration.

    Args:
        length_minutes: Length of each focus phase.
        rest_minutes: Length of each rest phase.
        iterations: Focus/rest cycles to run before exiting, 0 for no limit.
        fast: Treat one real second as one minute.
    """
    if length_minutes <= 0 or rest_minutes <= 0:
        raise ValueError("durations must be positive")
    if iterations < 0:
        raise ValueError("iterations must not be negative")

    second_length = 1 if fast else 60
    return Configuration(
        focus_seconds=length_minutes * second_length,
        rest_seconds=rest_minutes * second_length,
        max_iterations=iterations,
    )


def finished_pomodoros(iteration: int, resting: bool) -> int:
    """Count focus phases that are over.

    A focus phase only counts once the rest that follows it has started.
    """
    return iteration if resting else iteration - 1


@dataclass
class SessionState:
    """Progress shared between the session loop and the interrupt handler.

    The iteration number and resting flag always change together under
    ``_lock`` so readers never see one updated without the other.
    """

    start_time: float
    iteration: int = 1
    resting: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def snapshot(self) -> Tuple[int, bool]:
        with self._lock:
            return self.iteration, self.resting

    def begin_rest(self) -> None:
        with self._lock:
            self.resting = True

    def begin_next_focus(self) -> int:
        with self._lock:
            self.iteration += 1
            self.resting = False
            return self.iteration

    def finished(self) -> int:
        iteration, resting = self.snapshot()
        return finished_pomodoros(iteration, resting)
