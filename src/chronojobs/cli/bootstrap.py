# src/chronojobs/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the scheduler, clock and shared lock into AppState,
- registers the optional heartbeat job.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..config import get_settings
from ..core.clock import SYSTEM_CLOCK
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_api import schedule_message
from ..tasks.task_models import Task
from ..tasks.task_scheduler import Scheduler

logger = logging.getLogger(__name__)

HEARTBEAT_JOB_NAME = "heartbeat"


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    return AppState(
        settings=settings,
        scheduler=Scheduler(),
        clock=clock or SYSTEM_CLOCK,
    )


def register_heartbeat(state: AppState) -> Task | None:
    """Register the heartbeat message job if enabled in settings."""
    settings = state.settings
    if not getattr(settings, "heartbeat_enabled", False):
        return None

    app_name = str(getattr(settings, "app_name", "chronojobs"))
    with state.lock:
        task = schedule_message(
            state.scheduler,
            name=HEARTBEAT_JOB_NAME,
            message=f"{app_name} is alive",
            every=timedelta(seconds=float(settings.heartbeat_every_seconds)),
            expire_in=timedelta(seconds=float(settings.heartbeat_ttl_seconds)),
            emit=state.emit,
            clock=state.clock,
        )
    return task
