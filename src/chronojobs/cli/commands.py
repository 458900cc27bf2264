# src/chronojobs/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.ports import Emitter
from ..core.state import AppState
from ..tasks.task_api import describe_task, format_duration, parse_duration, schedule_message
from ..tasks.task_models import TaskError
from ..tasks.task_scheduler import JobDoesntExist, SchedulerError

CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], Emitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /jobs, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: Emitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    tick = float(getattr(settings, "tick_seconds", 1.0))
    return (
        "Status:\n"
        f"  Now: {state.clock.now().isoformat(timespec='seconds')}\n"
        f"  Tick: every {tick:g}s\n"
        f"  Registered jobs: {len(state.scheduler)}"
    )


def cmd_jobs(state: AppState, args: list[str]) -> str:
    jobs = state.scheduler.jobs()
    if not jobs:
        return "No jobs registered."
    lines = [f"Jobs ({len(jobs)}):"]
    for i, task in enumerate(jobs, start=1):
        lines.append(f"{i}. {describe_task(task)}")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str], emit: Emitter | None = None) -> str:
    """
    /add <name> <every> <expire_in> <message...>
    Durations: 30s, 5m, 1h, 2d.
    """
    usage = "Usage: /add <name> <every> <expire_in> <message...>  (durations: 30s, 5m, 1h, 2d)"
    if len(args) < 4:
        return usage

    name, every_raw, expire_raw = args[0], args[1], args[2]
    message = " ".join(args[3:])

    every = parse_duration(every_raw)
    expire_in = parse_duration(expire_raw)
    if every is None or expire_in is None:
        return usage

    try:
        task = schedule_message(
            state.scheduler,
            name=name,
            message=message,
            every=every,
            expire_in=expire_in,
            emit=emit or state.emit,
            clock=state.clock,
        )
    except (TaskError, SchedulerError) as e:
        logger.info("/add rejected name=%s: %s", name, e)
        return f"Cannot add job: {e}"

    return f"Job {task.name} added: every {format_duration(task.interval)}, expires {task.expire.isoformat(timespec='seconds')}."


def cmd_remove(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /remove <name>"
    try:
        task = state.scheduler.remove_job(args[0])
    except SchedulerError as e:
        return f"Cannot remove job: {e}"
    return f"Job {task.name} removed."


def cmd_extend(state: AppState, args: list[str]) -> str:
    """
    /extend <name> <expire_in>
    Sets a new expiration counted from now.
    """
    if len(args) != 2:
        return "Usage: /extend <name> <expire_in>"

    task = state.scheduler.get_job(args[0])
    if task is None:
        return f"Cannot extend job: {JobDoesntExist(args[0])}"

    expire_in = parse_duration(args[1])
    if expire_in is None:
        return "Usage: /extend <name> <expire_in>"

    try:
        task.update_expiration(state.clock.now() + expire_in)
    except TaskError as e:
        return f"Cannot extend job: {e}"
    return f"Job {task.name} now expires {task.expire.isoformat(timespec='seconds')}."


def cmd_tick(state: AppState, args: list[str]) -> str:
    """Run one polling tick right now."""
    before = set(state.scheduler.names())
    state.scheduler.run()
    evicted = sorted(before - set(state.scheduler.names()))
    if evicted:
        return f"Tick done. Expired: {', '.join(evicted)}."
    return "Tick done."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show clock, tick interval and job count.")
registry.register("jobs", cmd_jobs, help_text="List registered jobs.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a message job: /add <name> <every> <expire_in> <message...>."
)
registry.register("remove", cmd_remove, help_text="Remove a job: /remove <name>.", aliases=["rm"])
registry.register("extend", cmd_extend, help_text="Re-arm a job's expiration: /extend <name> <expire_in>.")
registry.register("tick", cmd_tick, help_text="Run one polling tick now.")
