"""Terminal rendering for the countdown, transitions and summary."""
from __future__ import annotations

import logging
import math
import threading
from datetime import timedelta
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .clock import Clock

logger = logging.getLogger(__name__)

BAR_WIDTH = 78
TRANSITION_DOTS = 6
DOT_SECONDS = 0.2


def percent_complete(remaining: float, total: float) -> float:
    """Fraction of ``total`` already used, clamped to [0, 1]."""
    fraction = (total - remaining) / total
    return min(max(fraction, 0.0), 1.0)


def format_clock(remaining: float) -> str:
    remaining = max(remaining, 0.0)
    minutes = int(remaining // 60)
    seconds = int(math.floor(remaining + 0.5)) % 60
    return f"{minutes:02d}:{seconds:02d}"


def progress_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = int(fraction * width)
    return "[" + "-" * filled + " " * (width - filled) + "]"


def format_frame(remaining: float, total: float, iteration: int, label: str) -> str:
    """Build the three-line countdown frame."""
    fraction = percent_complete(max(remaining, 0.0), total)
    return "\n".join(
        [
            f"{label} {iteration}",
            f"{format_clock(remaining)} ({math.floor(fraction * 100)}%)",
            progress_bar(fraction),
        ]
    )


def format_summary(finished: int, elapsed_seconds: float) -> str:
    if finished == 1:
        headline = "Finished 1 Pomodoro!"
    else:
        headline = f"Finished {finished} Pomodoros!"
    elapsed = timedelta(seconds=round(max(elapsed_seconds, 0.0)))
    return f"{headline}\nElapsed Time: {elapsed}"


class Display:
    """Terminal output for the countdown.

    On an interactive terminal each frame overwrites the previous one in a
    rich ``Live`` region. When output is piped, frames and transitions are
    printed line by line instead, since ``Live`` only draws on a terminal.

    All writes share one lock so a frame is never cut in half by the
    interrupt handler. After :meth:`close` further output is dropped.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)
        self.live_mode = self.console.is_terminal and not self.console.is_dumb_terminal
        self._live = Live(console=self.console, auto_refresh=False)
        self._lock = threading.RLock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        with self._lock:
            if self._closed or not self.live_mode:
                return
            self._live.start()

    def _write(self, text: str, end: str = "\n") -> None:
        with self._lock:
            if self._closed:
                return
            try:
                if self.live_mode:
                    self._live.update(Text(text), refresh=True)
                else:
                    self.console.print(Text(text), end=end)
            except OSError as exc:
                logger.warning("Terminal write failed: %s", exc)

    def show(self, text: str) -> None:
        """Replace the live region with ``text``, or print it when piped."""
        self._write(text)

    def render(self, remaining: float, total: float, iteration: int, label: str) -> None:
        self.show(format_frame(remaining, total, iteration, label))

    def transition(self, message: str, clock: Clock) -> None:
        """Show ``message`` and grow a trail of dots behind it."""
        logger.debug("Transition: %s", message)
        if not self.live_mode:
            self._write(message, end="")
            for _ in range(TRANSITION_DOTS):
                clock.sleep(DOT_SECONDS)
                self._write(".", end="")
            self._write("")
            return

        text = message
        self.show(text)
        for _ in range(TRANSITION_DOTS):
            clock.sleep(DOT_SECONDS)
            text += "."
            self.show(text)

    def summary(self, finished: int, elapsed_seconds: float) -> None:
        """Print the closing summary below the last frame and close the display."""
        message = format_summary(finished, elapsed_seconds)
        logger.info("Summary: %s", message.replace("\n", "; "))
        with self._lock:
            if self._closed:
                return
            self.close()
            try:
                self.console.print()
                self.console.print(Text(message))
            except OSError as exc:
                logger.warning("Terminal write failed: %s", exc)

    def close(self) -> None:
        """Stop the live region and restore the cursor. Safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._live.stop()
            except OSError as exc:
                logger.warning("Terminal write failed: %s", exc)
