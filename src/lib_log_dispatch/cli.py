"""Click command group for inspecting and exercising the dispatcher.

Contents
--------
* :func:`cli` - root group with ``--use-dotenv`` and ``--traceback`` toggles.
* ``info`` - print the metadata banner.
* ``logdemo`` - push one entry per level through a dispatcher to the console.
* :func:`main` - entry point delegating to :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import os
from typing import Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console

from . import __init__conf__
from . import config as dispatch_config
from .adapters import RichConsoleAppender
from .domain import LogEntry, LogLevel
from .runtime import Dispatcher, LoggerProxy, SystemClock

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner used by the CLI and docs."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


class _FailingAppender:
    """Appender that always raises; shows that other appenders keep receiving."""

    name = "failing-demo"

    def log(self, entry: LogEntry) -> None:
        raise RuntimeError(f"demo appender refused {entry.message!r}")

    def flush(self) -> None:
        raise RuntimeError("demo appender cannot flush")


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(__init__conf__.version, "--version", "-V", prog_name=__init__conf__.shell_command)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    help="Show full Python tracebacks when a command fails.",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None, traceback: bool | None) -> None:
    """Asynchronous log dispatcher utilities."""

    if dispatch_config.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(dispatch_config.DOTENV_ENV_VAR)):
        dispatch_config.enable_dotenv()
    if traceback is not None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the package metadata banner."""

    click.echo(summary_info(), nl=False)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--repeat", default=1, show_default=True, type=click.IntRange(min=1), help="Entries emitted per level.")
@click.option("--lag-check-interval", default=None, type=click.IntRange(min=0), help="Override the lag check interval.")
@click.option("--with-failing-appender", is_flag=True, help="Register an appender that always raises.")
@click.option("--no-color", is_flag=True, help="Render console lines without colour.")
def cli_logdemo(repeat: int, lag_check_interval: int | None, with_failing_appender: bool, no_color: bool) -> None:
    """Emit one entry per level through a fresh dispatcher and flush it."""

    summary = _logdemo(
        repeat=repeat,
        lag_check_interval=lag_check_interval,
        with_failing_appender=with_failing_appender,
        no_color=no_color,
    )
    click.echo(
        f"emitted {summary['emitted']} entries to {summary['appenders']} appender(s); "
        f"flushed={summary['flushed']} restarts={summary['restarts']}"
    )


def _logdemo(
    *,
    repeat: int,
    lag_check_interval: int | None,
    with_failing_appender: bool,
    no_color: bool,
) -> dict[str, Any]:
    clock = SystemClock()
    dispatcher = Dispatcher(clock=clock)
    if lag_check_interval is not None:
        dispatcher.lag_check_interval = lag_check_interval
    if with_failing_appender:
        dispatcher.add_appender(_FailingAppender())
    console = Console(force_terminal=False if no_color else None, no_color=no_color, highlight=False)
    dispatcher.add_appender(RichConsoleAppender(console=console, no_color=no_color))

    logger = LoggerProxy("lib_log_dispatch.demo", dispatcher.log, clock)
    emitted = 0
    for round_index in range(repeat):
        for level in LogLevel:
            logger.log(level, f"{level.severity} demo message", payload={"round": round_index + 1})
            emitted += 1

    flushed = dispatcher.flush()
    appender_count = len(dispatcher.appenders)
    dispatcher.shutdown(flush=False)
    return {
        "emitted": emitted,
        "appenders": appender_count,
        "flushed": flushed,
        "restarts": dispatcher.restart_count,
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI through :mod:`lib_cli_exit_tools`, restoring traceback preferences.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Exit code reported by the command.
    """

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
