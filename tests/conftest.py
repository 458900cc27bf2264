# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from chronojobs.core.state import AppState
from chronojobs.tasks.task_scheduler import Scheduler

from .fakes import FakeClock, LineSink


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sink() -> LineSink:
    return LineSink()


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="chronojobs-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        tick_seconds=0.05,
        console_enabled=False,
        heartbeat_enabled=False,
        heartbeat_every_seconds=60.0,
        heartbeat_ttl_seconds=3600.0,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock, sink: LineSink) -> AppState:
    """AppState wired with a fake clock and a line sink instead of print."""
    return AppState(settings=settings, scheduler=Scheduler(), clock=clock, emit=sink)
