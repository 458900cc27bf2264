# src/chronojobs/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

APP_LOGGER_PREFIX = "chronojobs"

# Console floors per logger name (prefix match, longest wins).
# The scheduler logs every executed job at DEBUG; only evictions (INFO) reach the console.
DEFAULT_CONSOLE_FLOORS: dict[str, int] = {
    "chronojobs.tasks.task_scheduler": logging.INFO,
    # warnings.warn(...) from payloads should be visible while a job is misbehaving
    "py.warnings": logging.WARNING,
}


class ConsoleNoiseFilter(logging.Filter):
    """
    Per-logger minimum level for the interactive console.

    App loggers pass by default, anything else needs `other_floor`.
    `floors` overrides both for specific logger names or prefixes.
    """

    def __init__(
        self,
        floors: Mapping[str, int] | None = None,
        *,
        other_floor: int = logging.ERROR,
    ) -> None:
        super().__init__()
        merged = dict(DEFAULT_CONSOLE_FLOORS if floors is None else floors)
        # Longest prefix first so "a.b.c" beats "a.b".
        self._floors = sorted(merged.items(), key=lambda kv: len(kv[0]), reverse=True)
        self._other_floor = other_floor

    def floor_for(self, name: str) -> int:
        for prefix, level in self._floors:
            if name == prefix or name.startswith(prefix + "."):
                return level
        if name == APP_LOGGER_PREFIX or name.startswith(APP_LOGGER_PREFIX + "."):
            return logging.NOTSET
        return self._other_floor

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.floor_for(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/chronojobs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    console_floors: Mapping[str, int] | None = None,
) -> Path:
    """
    Configure logging with:
    - Console handler: readable + filtered for interactive use
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info). Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "chronojobs.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(ConsoleNoiseFilter(console_floors))
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
