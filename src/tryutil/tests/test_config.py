"""Tests for settings loading and capture logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tryutil import (
    Ok,
    Result,
    TryutilSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_defaults() -> None:
    settings = get_settings()

    assert settings.debug is False
    assert settings.logging.level == "WARNING"
    assert settings.logging.log_captures is False
    assert settings.trace_captures is False


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRYUTIL_LOG_LEVEL", "debug")
    monkeypatch.setenv("TRYUTIL_LOG_LOG_CAPTURES", "true")
    clear_settings_cache()

    settings = get_settings()

    assert settings.logging.level == "DEBUG"
    assert settings.trace_captures is True


def test_debug_enables_capture_tracing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRYUTIL_DEBUG", "1")
    clear_settings_cache()

    assert get_settings().trace_captures is True


def test_invalid_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRYUTIL_LOG_LEVEL", "LOUD")
    clear_settings_cache()

    with pytest.raises(ValueError):
        get_settings()


def test_configure_logging_sets_package_level() -> None:
    logger = configure_logging()
    assert logger.name == "tryutil"
    assert logger.level == logging.WARNING

    configure_logging(TryutilSettings(debug=True))
    assert logger.level == logging.DEBUG


# ═════════════════════════════════════════════════════════════════════════════
# Capture Logging
# ═════════════════════════════════════════════════════════════════════════════


def test_captures_not_logged_by_default(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="tryutil.result")

    Result.of(lambda: 1 / 0)

    assert caplog.records == []


def test_captures_logged_when_enabled(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("TRYUTIL_LOG_LOG_CAPTURES", "true")
    clear_settings_cache()
    caplog.set_level(logging.DEBUG, logger="tryutil.result")

    Result.of(lambda: 1 / 0)
    Ok("x").map(int)

    messages = [r.getMessage() for r in caplog.records]
    assert messages[0].startswith("of captured ZeroDivisionError")
    assert messages[1].startswith("map captured ValueError")
    assert all(r.exc_info is None for r in caplog.records)


def test_capture_log_includes_traceback(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("TRYUTIL_DEBUG", "true")
    monkeypatch.setenv("TRYUTIL_LOG_INCLUDE_TRACEBACK", "true")
    clear_settings_cache()
    caplog.set_level(logging.DEBUG, logger="tryutil.result")

    Result.of(lambda: {}["k"])

    (record,) = caplog.records
    assert record.exc_info is not None
    assert record.exc_info[0] is KeyError


# ═════════════════════════════════════════════════════════════════════════════
# Invalid Configuration
# ═════════════════════════════════════════════════════════════════════════════


def test_invalid_settings_do_not_break_capture(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    """Capture operators still return Err when settings fail validation."""
    monkeypatch.setenv("TRYUTIL_LOG_LEVEL", "LOUD")
    clear_settings_cache()
    caplog.set_level(logging.DEBUG, logger="tryutil.result")

    assert Result.of(lambda: 1 / 0).is_err()
    assert Ok("x").map(int).is_err()
    assert Ok(1).flat_map(lambda _: {}["k"]).is_err()

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "capture tracing disabled" in warnings[0].getMessage()
    assert not [r for r in caplog.records if r.levelno == logging.DEBUG]


def test_invalid_env_file_does_not_break_capture(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    (tmp_path / ".env").write_text("TRYUTIL_DEBUG=maybe\n")
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    caplog.set_level(logging.DEBUG, logger="tryutil.result")

    with pytest.raises(ValueError):
        get_settings()
    assert isinstance(Ok("x").map(int).get_cause(), ValueError)
