"""Command line interface for the Pomodoro timer."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from rich.console import Console

from . import scheduler
from .clock import Clock, SystemClock
from .display import Display
from .interrupt import InterruptHandler
from .logger import setup_logging
from .session import Session

logger = logging.getLogger(__name__)


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(list(argv))
    try:
        args.config = scheduler.build_config(
            length_minutes=args.length,
            rest_minutes=args.rest,
            iterations=args.iterations,
            fast=args.fast,
        )
    except ValueError as exc:
        parser.error(str(exc))
    return args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Pomodoro timer in your terminal.")
    parser.add_argument("--length", type=float, default=scheduler.DEFAULTS["length"], help="length of the pomodoro, in minutes")
    parser.add_argument("--rest", type=float, default=scheduler.DEFAULTS["rest"], help="length of the rest period, in minutes")
    parser.add_argument("--iterations", type=int, default=scheduler.DEFAULTS["iterations"], help="number of iterations to run before exiting; 0 runs indefinitely")
    parser.add_argument("--fast", action="store_true", help="treat one real second as one minute (handy for demos)")
    parser.add_argument("--verbose", action="store_true", help="also log every phase and transition to the log file")
    return parser


def print_settings(console: Console, args: argparse.Namespace) -> None:
    unit = "second(s)" if args.fast else "minute(s)"
    console.print("Focus     :", f"{args.length:g}", unit)
    console.print("Rest      :", f"{args.rest:g}", unit)
    console.print("Iterations:", args.iterations or "unlimited")
    console.print("Press Ctrl+C to stop early.")
    console.print()


def main(
    argv: Optional[Iterable[str]] = None,
    *,
    console: Optional[Console] = None,
    clock: Optional[Clock] = None,
) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    config: scheduler.Configuration = args.config
    log_file = setup_logging(verbose=args.verbose)
    clock = clock or SystemClock()
    console = console or Console(highlight=False)

    print_settings(console, args)
    display = Display(console)
    state = scheduler.SessionState(start_time=clock.now())
    handler = InterruptHandler(state, display, clock)

    logger.info("Starting with %s (log file %s)", config, log_file)
    try:
        display.start()
        handler.install()
        Session(config, state, display, clock).run()
    finally:
        display.close()
        handler.uninstall()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
