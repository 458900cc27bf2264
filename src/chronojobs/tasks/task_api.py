# src/chronojobs/tasks/task_api.py

from __future__ import annotations

import logging
import re
from datetime import timedelta

from ..core.clock import SYSTEM_CLOCK
from ..core.ports import Clock, Emitter, Payload
from .task_models import Task
from .task_scheduler import Scheduler

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^(\d+)([smhd])$")
_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(raw: str) -> timedelta | None:
    """Parse strings like '30s', '5m', '1h', '2d'. Returns None if malformed."""
    match = _DURATION_RE.match((raw or "").strip().lower())
    if not match:
        return None
    value = int(match.group(1))
    return timedelta(**{_UNITS[match.group(2)]: value})


def format_duration(delta: timedelta) -> str:
    total = int(delta.total_seconds())
    for suffix, size in (("d", 86400), ("h", 3600), ("m", 60)):
        if total >= size and total % size == 0:
            return f"{total // size}{suffix}"
    return f"{delta.total_seconds():g}s"


def message_payload(message: str, *, emit: Emitter | None = None, clock: Clock | None = None) -> Payload:
    """
    Build a payload that announces `message` with a timestamp on every run.

    emit defaults to print (console output); the line is also logged at INFO.
    """
    out = emit or print
    clk = clock or SYSTEM_CLOCK

    def _payload() -> None:
        line = f"[{clk.now().isoformat(timespec='seconds')}] {message}"
        logger.info("Message task fired: %s", message)
        out(line)

    return _payload


def schedule_message(
    scheduler: Scheduler,
    *,
    name: str,
    message: str,
    every: timedelta | float,
    expire_in: timedelta | float,
    emit: Emitter | None = None,
    clock: Clock | None = None,
) -> Task:
    """
    Convenience helper: register a recurring "announce a message" task.

    The task expires `expire_in` from now. Task/Scheduler errors propagate to the caller.
    """
    clk = clock or SYSTEM_CLOCK
    if not isinstance(expire_in, timedelta):
        expire_in = timedelta(seconds=expire_in)

    task = Task(
        name,
        clk.now() + expire_in,
        every,
        message_payload(message, emit=emit, clock=clk),
        clock=clk,
    )
    scheduler.add_job(task)
    logger.info("Scheduled message task name=%s every=%s expire=%s", task.name, task.interval, task.expire)
    return task


def describe_task(task: Task) -> str:
    """One-line summary for listings (/jobs)."""
    next_run = task.next_run_time()
    last = task.last_run.isoformat(timespec="seconds") if task.last_run else "never"
    nxt = next_run.isoformat(timespec="seconds") if next_run else "now"
    flag = " [expired]" if task.should_remove() else ""
    return (
        f"{task.name}: every {format_duration(task.interval)}, "
        f"{task.phase().value}, last={last}, next={nxt}, "
        f"expires={task.expire.isoformat(timespec='seconds')}{flag}"
    )
