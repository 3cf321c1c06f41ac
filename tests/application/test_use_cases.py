from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

import pytest

from lib_log_dispatch.application.use_cases import (
    DEFAULT_LOGGER_NAME,
    Diagnostics,
    DispatchHandler,
    create_dispatch_handler,
    create_shutdown,
)
from lib_log_dispatch.domain import AppenderRegistry, ControlMessage, FlushCommand, LagMonitor
from tests.os_markers import OS_AGNOSTIC
from tests.support import BASE_TIME, BrokenAppender, DiagnosticRecorder, FixedClock, RecordingAppender, make_entry

pytestmark = [OS_AGNOSTIC]


def build_handler(
    *appenders: object,
    diagnostics: DiagnosticRecorder | None = None,
    lag_monitor: LagMonitor | None = None,
    clock: FixedClock | None = None,
    queue_size: int = 0,
) -> DispatchHandler:
    registry = AppenderRegistry()
    for appender in appenders:
        registry.append(appender)  # type: ignore[arg-type]
    return create_dispatch_handler(
        registry=registry,
        lag_monitor=lag_monitor or LagMonitor(),
        clock=clock or FixedClock(),
        queue_size=lambda: queue_size,
        diagnostics=Diagnostics(hook=diagnostics),
    )


def test_handler_delivers_entries_in_registration_order() -> None:
    journal: list[tuple[str, str]] = []
    handler = build_handler(RecordingAppender("a", journal), RecordingAppender("b", journal))

    handler(make_entry(0))

    assert journal == [("a", "message-0"), ("b", "message-0")]


def test_handler_isolates_failing_appender(diagnostics: DiagnosticRecorder) -> None:
    survivor = RecordingAppender()
    handler = build_handler(BrokenAppender(), survivor, diagnostics=diagnostics)

    handler(make_entry(0))

    assert survivor.messages == ["message-0"]
    name, payload = diagnostics.events[0]
    assert name == "appender_log_failed"
    assert payload["appender"] == "broken"
    assert "ConnectionError" in payload["exception"]


def test_handler_answers_flush_even_when_an_appender_fails(diagnostics: DiagnosticRecorder) -> None:
    survivor = RecordingAppender()
    handler = build_handler(BrokenAppender(), survivor, diagnostics=diagnostics)
    command = FlushCommand()

    handler(command)

    assert command.reply.wait(0) is True
    assert survivor.flush_calls == 1
    assert diagnostics.names() == ["appender_flush_failed", "appender_flushed"]


def test_handler_reports_lag_with_backlog(diagnostics: DiagnosticRecorder, caplog: pytest.LogCaptureFixture) -> None:
    handler = build_handler(
        RecordingAppender(),
        diagnostics=diagnostics,
        lag_monitor=LagMonitor(check_interval=0, threshold_seconds=30),
        clock=FixedClock(BASE_TIME + timedelta(seconds=45)),
        queue_size=7,
    )

    with caplog.at_level(logging.WARNING, logger=DEFAULT_LOGGER_NAME):
        handler(make_entry(0))

    assert diagnostics.events == [("lag_detected", {"lag_seconds": 45.0, "queue_size": 7})]
    assert any("fallen behind by 45.000 seconds with 7 messages" in record.getMessage() for record in caplog.records)


def test_handler_ignores_unknown_commands(diagnostics: DiagnosticRecorder) -> None:
    appender = RecordingAppender()
    handler = build_handler(appender, diagnostics=diagnostics)

    handler(ControlMessage("reopen"))

    assert appender.messages == []
    assert appender.flush_calls == 0
    assert diagnostics.events == [("unknown_command", {"command": "reopen"})]


def test_diagnostics_swallow_hook_failures(caplog: pytest.LogCaptureFixture) -> None:
    def explode(name: str, payload: dict[str, object]) -> None:
        raise RuntimeError("hook down")

    diagnostics = Diagnostics(hook=explode)

    with caplog.at_level(logging.ERROR, logger=DEFAULT_LOGGER_NAME):
        diagnostics.emit("lag_detected", {})

    assert "Diagnostic hook raised while reporting lag_detected" in caplog.text


def test_diagnostics_fall_back_to_last_resort_when_logger_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    class Exploding(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            raise OSError("disk full")

    class Capture(logging.Handler):
        def __init__(self) -> None:
            super().__init__()
            self.messages: list[str] = []

        def emit(self, record: logging.LogRecord) -> None:
            self.messages.append(record.getMessage())

    broken = logging.Logger("tests.broken", logging.DEBUG)
    broken.addHandler(Exploding())
    fallback = Capture()
    monkeypatch.setattr(logging, "lastResort", fallback)
    diagnostics = Diagnostics(logger=broken)

    diagnostics.error("Failed to %s appender: %s", "flush", "file")

    assert len(fallback.messages) == 1
    assert fallback.messages[0].startswith("Failed to flush appender: file (diagnostic logger failed: OSError(")


def test_diagnostics_logger_reset_restores_default() -> None:
    diagnostics = Diagnostics(logger=logging.getLogger("tests.custom"))
    assert diagnostics.logger.name == "tests.custom"

    diagnostics.logger = None

    assert diagnostics.logger.name == DEFAULT_LOGGER_NAME


def test_shutdown_flushes_before_stopping() -> None:
    calls: list[str] = []

    def flush() -> bool:
        calls.append("flush")
        return True

    def stop() -> None:
        calls.append("stop")

    shutdown = create_shutdown(flush=flush, stop=stop)

    assert asyncio.run(shutdown()) is True
    assert calls == ["flush", "stop"]


@pytest.mark.asyncio
async def test_shutdown_reports_failed_flush() -> None:
    stopped: list[bool] = []
    shutdown = create_shutdown(flush=lambda: False, stop=lambda: stopped.append(True))

    assert await shutdown() is False
    assert stopped == [True]
