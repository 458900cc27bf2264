# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from chronojobs.config import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "CHRONO_APP_NAME",
        "CHRONO_LOG_LEVEL",
        "CHRONO_DATA_DIR",
        "CHRONO_TICK_SECONDS",
        "CHRONO_CONSOLE_ENABLED",
        "CHRONO_HEARTBEAT_ENABLED",
        "CHRONO_HEARTBEAT_EVERY",
        "CHRONO_HEARTBEAT_TTL",
    ):
        monkeypatch.delenv(key, raising=False)

    s = Settings.from_env()

    assert s.app_name == "chronojobs"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/chronojobs")
    assert s.tick_seconds == 1.0
    assert s.console_enabled is True
    assert s.heartbeat_enabled is False
    assert s.heartbeat_every_seconds == 60.0
    assert s.heartbeat_ttl_seconds == 3600.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CHRONO_APP_NAME", "cron-lite")
    monkeypatch.setenv("CHRONO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CHRONO_TICK_SECONDS", "0.25")
    monkeypatch.setenv("CHRONO_CONSOLE_ENABLED", "off")
    monkeypatch.setenv("CHRONO_HEARTBEAT_ENABLED", "yes")
    monkeypatch.setenv("CHRONO_HEARTBEAT_EVERY", "5m")
    monkeypatch.setenv("CHRONO_HEARTBEAT_TTL", "7200")

    s = Settings.from_env()

    assert s.app_name == "cron-lite"
    assert s.data_dir == tmp_path
    assert s.tick_seconds == 0.25
    assert s.console_enabled is False
    assert s.heartbeat_enabled is True
    assert s.heartbeat_every_seconds == 300.0
    assert s.heartbeat_ttl_seconds == 7200.0


def test_malformed_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHRONO_TICK_SECONDS", "fast")
    monkeypatch.setenv("CHRONO_HEARTBEAT_EVERY", "sometimes")
    s = Settings.from_env()
    assert s.tick_seconds == 1.0
    assert s.heartbeat_every_seconds == 60.0

    monkeypatch.setenv("CHRONO_TICK_SECONDS", "-3")
    assert Settings.from_env().tick_seconds == 1.0


def test_get_settings_is_shared() -> None:
    assert get_settings() is get_settings()
