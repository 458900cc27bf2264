# src/chronojobs/tasks/task_scheduler.py

from __future__ import annotations

"""
Task scheduler.

An in-memory registry of named tasks plus a single polling operation that:
- executes every task that is due,
- then evicts every task that has expired.

The registry has no lock, thread or timer of its own. Whoever shares a Scheduler
between threads serializes every call (including run()) with one lock;
run_task_scheduler() below does that for the background driver.
"""

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .task_models import Task

if TYPE_CHECKING:
    from ..core.state import AppState

logger = logging.getLogger(__name__)


class SchedulerError(Exception):
    """Base class for registry errors."""


class JobAlreadyExists(SchedulerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Job already exists: {name}")
        self.name = name


class JobDoesntExist(SchedulerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Job doesn't exist: {name}")
        self.name = name


class Scheduler:
    """Name-keyed registry of tasks. Names are unique."""

    def __init__(self) -> None:
        self._jobs: dict[str, Task] = {}

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, name: object) -> bool:
        return name in self._jobs

    def names(self) -> list[str]:
        return sorted(self._jobs)

    def jobs(self) -> list[Task]:
        """Snapshot of registered tasks, ordered by name."""
        return [self._jobs[n] for n in self.names()]

    def add_job(self, task: Task) -> None:
        if task.name in self._jobs:
            raise JobAlreadyExists(task.name)
        self._jobs[task.name] = task
        logger.debug("Job added name=%s interval=%s expire=%s", task.name, task.interval, task.expire)

    def remove_job(self, name: str) -> Task:
        try:
            task = self._jobs.pop(name)
        except KeyError:
            raise JobDoesntExist(name) from None
        logger.debug("Job removed name=%s", name)
        return task

    def get_job(self, name: str) -> Task | None:
        return self._jobs.get(name)

    def run(self) -> None:
        """
        One polling tick.

        Execution is applied to all due tasks before eviction is evaluated for any
        task, so a task that is both due and expired runs one last time and is then
        removed. Payload exceptions are not caught here.
        """
        for task in list(self._jobs.values()):
            if task.is_due():
                logger.debug("Executing job name=%s", task.name)
                task.execute()

        expired = [name for name, task in self._jobs.items() if task.should_remove()]
        for name in expired:
            del self._jobs[name]
            logger.info("Job %s expired and was removed", name)


async def run_task_scheduler(
        scheduler: Scheduler,
        *,
        interval_seconds: float = 1.0,
        lock: threading.Lock | threading.RLock | None = None,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling driver.

    Every interval_seconds:
    - take the lock (if given) so no add/remove/get interleaves with the tick
    - call scheduler.run()
    A tick that raises is logged and the loop continues with the next tick.

    To stop the driver, set stop_event or cancel the coroutine/task.
    """
    sleep_s = max(0.05, float(interval_seconds))

    while stop_event is None or not stop_event.is_set():
        try:
            if lock is not None:
                with lock:
                    scheduler.run()
            else:
                scheduler.run()
        except Exception:
            logger.exception("Scheduler tick failed")

        if stop_event is None:
            await asyncio.sleep(sleep_s)
            continue

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)


@dataclass(slots=True)
class SchedulerBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal scheduler stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_scheduler_in_background(state: AppState) -> SchedulerBackgroundRunner | None:
    """
    Start the polling driver in a background thread (so the console REPL can run in parallel).

    The driver gets its own event loop; every tick holds state.lock.
    """
    interval = float(getattr(state.settings, "tick_seconds", 1.0))
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                run_task_scheduler(
                    state.scheduler,
                    interval_seconds=interval,
                    lock=state.lock,
                    stop_event=stop_event,
                )
            )
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="chronojobs-scheduler", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Scheduler thread did not initialize properly.")
        return None

    logger.info("Scheduler background thread started (tick=%.2fs).", interval)
    return SchedulerBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
