import io
import logging
import signal

import pytest
from rich.console import Console

from pomodorotimer import cli


def make_console():
    return Console(file=io.StringIO(), force_terminal=False, width=120, highlight=False)


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert args.length == 25
    assert args.rest == 5
    assert args.iterations == 0
    assert args.config.focus_seconds == 1500
    assert args.config.unbounded


def test_parse_args_custom_values():
    args = cli.parse_args(["--length", "0.5", "--rest", "0.25", "--iterations", "2"])
    assert args.config.focus_seconds == 30
    assert args.config.rest_seconds == 15
    assert args.config.max_iterations == 2


@pytest.mark.parametrize(
    "argv",
    [["--length", "0"], ["--rest", "-1"], ["--iterations", "-2"], ["--length", "abc"]],
)
def test_invalid_flags_exit_with_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args(argv)
    assert excinfo.value.code == 2
    assert "usage" in capsys.readouterr().err


def test_main_runs_short_session(clock, log_dir):
    console = make_console()
    previous = signal.getsignal(signal.SIGINT)

    code = cli.main(
        ["--length", "0.01", "--rest", "0.01", "--iterations", "1"],
        console=console,
        clock=clock,
    )

    output = console.file.getvalue()
    assert code == 0
    assert "Press Ctrl+C to stop early." in output
    assert output.count("Finished 1 Pomodoro!") == 1
    assert output.count("Starting rest period") == 1
    assert "Starting Pomodoro" not in output
    assert "Elapsed Time: 0:00:03" in output
    assert signal.getsignal(signal.SIGINT) is previous
    assert (log_dir / "pomodorotimer.log").exists()


def test_main_fast_mode_settings_header(clock, log_dir):
    console = make_console()

    cli.main(["--length", "2", "--rest", "1", "--iterations", "2", "--fast"], console=console, clock=clock)

    output = console.file.getvalue()
    assert "Focus     : 2 second(s)" in output
    assert "Iterations: 2" in output
    assert "Finished 2 Pomodoros!" in output


def test_settings_header_uses_minutes_by_default():
    console = make_console()

    cli.print_settings(console, cli.parse_args([]))

    output = console.file.getvalue()
    assert "Focus     : 25 minute(s)" in output
    assert "Rest      : 5 minute(s)" in output
    assert "Iterations: unlimited" in output


def test_verbose_flag_logs_phases(clock, log_dir):
    cli.main(["--length", "1", "--rest", "1", "--iterations", "1", "--fast", "--verbose"], console=make_console(), clock=clock)
    for handler in logging.getLogger("pomodorotimer").handlers:
        handler.flush()

    text = (log_dir / "pomodorotimer.log").read_text(encoding="utf-8")
    assert "Starting Pomodoro 1" in text
    assert "Transition: Pomodoro 1 finished! Starting rest period" in text
