"""The focus/rest loop and the runner for a single phase."""
from __future__ import annotations

import logging
from typing import Protocol

from . import scheduler
from .clock import Clock, ticks

logger = logging.getLogger(__name__)


class Screen(Protocol):
    def render(self, remaining: float, total: float, iteration: int, label: str) -> None:
        ...

    def transition(self, message: str, clock: Clock) -> None:
        ...

    def summary(self, finished: int, elapsed_seconds: float) -> None:
        ...


def run_phase(screen: Screen, clock: Clock, phase: scheduler.Phase) -> None:
    """Count down ``phase``, redrawing once a second.

    The first frame shows the full duration. The phase ends on the first tick
    where the elapsed time is past the duration, after one last frame.
    """
    duration = phase.duration_seconds
    logger.debug("Starting %s %d (%.1fs)", phase.label, phase.iteration, duration)
    start = clock.now()
    screen.render(duration, duration, phase.iteration, phase.label)
    for now in ticks(clock, start):
        elapsed = now - start
        screen.render(duration - elapsed, duration, phase.iteration, phase.label)
        if elapsed > duration:
            screen.render(duration - (clock.now() - start), duration, phase.iteration, phase.label)
            break
    logger.debug("Finished %s %d", phase.label, phase.iteration)


class Session:
    """Alternates focus and rest phases until the configured count is reached."""

    def __init__(
        self,
        config: scheduler.Configuration,
        state: scheduler.SessionState,
        screen: Screen,
        clock: Clock,
    ) -> None:
        self.config = config
        self.state = state
        self.screen = screen
        self.clock = clock

    def run(self) -> int:
        """Run until finished and return the number of completed pomodoros.

        With ``max_iterations == 0`` this only returns by interruption.
        """
        logger.info(
            "Session started: focus=%.1fs rest=%.1fs iterations=%d",
            self.config.focus_seconds,
            self.config.rest_seconds,
            self.config.max_iterations,
        )
        while True:
            iteration, _ = self.state.snapshot()
            run_phase(
                self.screen,
                self.clock,
                scheduler.Phase(scheduler.FOCUS_LABEL, iteration, self.config.focus_seconds),
            )
            self.state.begin_rest()
            self.screen.transition(
                f"Pomodoro {iteration} finished! Starting rest period", self.clock
            )

            run_phase(
                self.screen,
                self.clock,
                scheduler.Phase(scheduler.REST_LABEL, iteration, self.config.rest_seconds),
            )

            if not self.config.unbounded and iteration == self.config.max_iterations:
                break
            iteration = self.state.begin_next_focus()
            self.screen.transition(f"Starting Pomodoro {iteration}", self.clock)

        self.screen.summary(iteration, self.clock.now() - self.state.start_time)
        return iteration
