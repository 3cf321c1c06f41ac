from __future__ import annotations

from collections.abc import Callable, Iterator
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

import lib_log_dispatch as log
from lib_log_dispatch.runtime import Dispatcher
from tests.support import DiagnosticRecorder


@pytest.fixture
def diagnostics() -> DiagnosticRecorder:
    return DiagnosticRecorder()


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=160, color_system=None)


@pytest.fixture
def dispatcher_factory() -> Iterator[Callable[..., Dispatcher]]:
    """Build dispatchers that are shut down when the test ends."""

    created: list[Dispatcher] = []

    def factory(**kwargs: Any) -> Dispatcher:
        dispatcher = Dispatcher(**kwargs)
        created.append(dispatcher)
        return dispatcher

    yield factory
    for dispatcher in created:
        dispatcher.shutdown(flush=False, timeout=5.0)


@pytest.fixture
def reset_runtime() -> Iterator[None]:
    try:
        yield
    finally:
        if log.is_initialised():
            log.shutdown()
