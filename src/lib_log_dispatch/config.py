"""Optional ``.env`` loading for the runtime settings.

Purpose
-------
Let operators keep ``LOG_*`` overrides in a ``.env`` file next to the
application. Loading is opt-in (CLI ``--use-dotenv`` or the
:data:`DOTENV_ENV_VAR` toggle) and never overrides variables that are
already present in the environment.
"""

from __future__ import annotations

import threading
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LIB_LOG_DISPATCH_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_STATE_LOCK = threading.Lock()
_LOADED_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit flag wins over the toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value='1')
    False
    >>> should_use_dotenv(env_value='on')
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY or not normalized:
        return False
    raise ValueError(f"{DOTENV_ENV_VAR} must be a boolean flag, got {env_value!r}")


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upwards; returns its path or ``None``.

    The first successful load is remembered; later calls return the same path
    without reading the file again.
    """

    global _LOADED_PATH
    with _STATE_LOCK:
        if _LOADED_PATH is not None:
            return _LOADED_PATH
        if search_from is not None:
            candidate = _search_upwards(search_from)
        else:
            found = find_dotenv(usecwd=True)
            candidate = Path(found).resolve() if found else None
        if candidate is None:
            return None
        load_dotenv(candidate, override=False)
        _LOADED_PATH = candidate
        return candidate


def _search_upwards(start: Path) -> Path | None:
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_PATH
    with _STATE_LOCK:
        _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
