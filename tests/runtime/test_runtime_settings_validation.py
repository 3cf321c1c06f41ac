from __future__ import annotations

import pytest

from lib_log_dispatch import runtime
from lib_log_dispatch.runtime import DispatcherSettings, build_runtime_settings


@pytest.mark.parametrize(
    "env_name, env_value, error_match",
    [
        ("LOG_LAG_CHECK_INTERVAL", "often", "must be an integer"),
        ("LOG_LAG_CHECK_INTERVAL", "-1", "must not be negative"),
        ("LOG_LAG_THRESHOLD_SECONDS", "soon", "must be a number"),
        ("LOG_LAG_THRESHOLD_SECONDS", "-0.5", "must not be negative"),
        ("LOG_RING_BUFFER_SIZE", "0", "must be positive"),
        ("LOG_AUTOSTART", "sometimes", "must be a boolean flag"),
    ],
)
def test_invalid_environment_values(
    monkeypatch: pytest.MonkeyPatch, env_name: str, env_value: str, error_match: str
) -> None:
    monkeypatch.setenv(env_name, env_value)
    with pytest.raises(ValueError, match=error_match):
        runtime.init(console_appender=False, register_atexit=False)
    assert runtime.is_initialised() is False


def test_negative_interval_argument_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LAG_CHECK_INTERVAL", raising=False)
    with pytest.raises(ValueError, match="LOG_LAG_CHECK_INTERVAL"):
        build_runtime_settings(lag_check_interval=-3)


def test_zero_lag_settings_are_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LAG_CHECK_INTERVAL", "0")
    monkeypatch.setenv("LOG_LAG_THRESHOLD_SECONDS", "0")

    settings = build_runtime_settings()

    assert settings.lag_check_interval == 0
    assert settings.lag_threshold_seconds == 0.0


def test_environment_flags_override_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_CONSOLE_APPENDER", "off")
    monkeypatch.setenv("LOG_RING_BUFFER", "yes")
    monkeypatch.setenv("LOG_RING_BUFFER_SIZE", "64")
    monkeypatch.setenv("LOG_CONSOLE_TEMPLATE", "{message}")

    settings = build_runtime_settings(console_appender=True, ring_buffer=False)

    assert settings.console_appender is False
    assert settings.ring_buffer is True
    assert settings.ring_buffer_size == 64
    assert settings.console_template == "{message}"


def test_blank_environment_values_fall_back_to_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LAG_CHECK_INTERVAL", "  ")
    monkeypatch.delenv("LOG_LAG_THRESHOLD_SECONDS", raising=False)
    monkeypatch.delenv("LOG_AUTOSTART", raising=False)

    settings = build_runtime_settings(lag_check_interval=12, lag_threshold_seconds=4, autostart=False)

    assert settings.lag_check_interval == 12
    assert settings.lag_threshold_seconds == 4.0
    assert settings.autostart is False


def test_default_settings_match_documented_defaults() -> None:
    settings = DispatcherSettings()

    assert settings.lag_check_interval == 5000
    assert settings.lag_threshold_seconds == 30.0
    assert settings.autostart is True
    assert settings.register_atexit is True
