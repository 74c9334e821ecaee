"""Shared fakes for driving the timer without real time or a real terminal."""
from __future__ import annotations

import logging
from typing import List, Tuple

import pytest


class FakeClock:
    """Virtual clock: ``sleep`` advances ``now`` instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.time = start
        self.sleeps: List[float] = []

    def now(self) -> float:
        return self.time

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.time += seconds


class RecordingScreen:
    """Collects everything the session asks the terminal to show."""

    def __init__(self) -> None:
        self.frames: List[Tuple[float, float, int, str]] = []
        self.transitions: List[str] = []
        self.summaries: List[Tuple[int, float]] = []

    def render(self, remaining, total, iteration, label):
        self.frames.append((remaining, total, iteration, label))

    def transition(self, message, clock):
        self.transitions.append(message)

    def summary(self, finished, elapsed_seconds):
        self.summaries.append((finished, elapsed_seconds))


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def screen():
    return RecordingScreen()


@pytest.fixture()
def log_dir(tmp_path, monkeypatch):
    """Send the application log file to a temporary directory."""
    from pomodorotimer import logger

    app_logger = logging.getLogger("pomodorotimer")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    monkeypatch.setattr(app_logger, "propagate", True)
    monkeypatch.setattr(logger, "user_log_dir", lambda app_name: str(tmp_path))
    yield tmp_path
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
