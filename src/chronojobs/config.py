# src/chronojobs/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Malformed values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "CHRONO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_duration_seconds(name: str, default: float) -> float:
    """Accept '30s' / '5m' / '1h' / '2d' or a plain number of seconds."""
    from .tasks.task_api import parse_duration

    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    delta = parse_duration(raw)
    if delta is not None:
        return delta.total_seconds()
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Driver ----
    tick_seconds: float
    console_enabled: bool

    # ---- Built-in heartbeat job ----
    heartbeat_enabled: bool
    heartbeat_every_seconds: float
    heartbeat_ttl_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "chronojobs").strip() or "chronojobs"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/chronojobs"))

        tick_seconds = _env_float(_k("TICK_SECONDS"), 1.0)
        if tick_seconds <= 0:
            tick_seconds = 1.0
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        heartbeat_enabled = _env_bool(_k("HEARTBEAT_ENABLED"), False)
        heartbeat_every_seconds = _env_duration_seconds(_k("HEARTBEAT_EVERY"), 60.0)
        heartbeat_ttl_seconds = _env_duration_seconds(_k("HEARTBEAT_TTL"), 3600.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tick_seconds=tick_seconds,
            console_enabled=console_enabled,
            heartbeat_enabled=heartbeat_enabled,
            heartbeat_every_seconds=heartbeat_every_seconds,
            heartbeat_ttl_seconds=heartbeat_ttl_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
