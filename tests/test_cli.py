"""CLI behaviour coverage for the dispatcher utilities."""

from __future__ import annotations

import re
import sys
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_dispatch import __init__conf__
from lib_log_dispatch import cli as cli_mod
from lib_log_dispatch.cli import summary_info

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click command with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == summary_info()
    assert result.output.startswith("Info for lib_log_dispatch:")


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert __init__conf__.version in stdout


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_logdemo_emits_one_entry_per_level() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["logdemo", "--no-color"])

    assert result.exit_code == 0
    plain_output = strip_ansi(result.output)
    assert "critical demo message" in plain_output
    assert "emitted 5 entries to 1 appender(s); flushed=True restarts=0" in plain_output


def test_cli_logdemo_survives_failing_appender() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["logdemo", "--no-color", "--repeat", "2", "--with-failing-appender"])

    assert result.exit_code == 0
    plain_output = strip_ansi(result.output)
    assert "emitted 10 entries to 2 appender(s); flushed=True restarts=0" in plain_output
    assert "debug demo message round=2" in plain_output


def test_cli_logdemo_forwards_options(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: dict[str, object] = {}

    def fake_logdemo(**kwargs: object) -> dict[str, object]:  # noqa: ANN401
        recorded.update(kwargs)
        return {"emitted": 0, "appenders": 0, "flushed": False, "restarts": 0}

    monkeypatch.setattr(cli_mod, "_logdemo", fake_logdemo)

    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["logdemo", "--lag-check-interval", "0", "--repeat", "3"])

    assert result.exit_code == 0
    assert recorded == {
        "repeat": 3,
        "lag_check_interval": 0,
        "with_failing_appender": False,
        "no_color": False,
    }


def test_cli_logdemo_rejects_negative_interval() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["logdemo", "--lag-check-interval", "-1"])

    assert result.exit_code != 0


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["--no-traceback", "info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--no-traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": False, "traceback_force_color": False}
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Info for lib_log_dispatch" in captured.out
