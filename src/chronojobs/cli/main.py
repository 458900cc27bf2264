# src/chronojobs/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the polling driver in a background thread,
- the console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state, register_heartbeat
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskError
from ..tasks.task_scheduler import SchedulerError, start_scheduler_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        register_heartbeat(state)
    except (TaskError, SchedulerError):
        logger.exception("Failed to register heartbeat job.")

    runner = start_scheduler_in_background(state)
    if runner is None:
        logger.error("Scheduler driver failed to start; exiting.")
        return

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError):
        # Not the main thread, or the platform lacks SIGTERM.
        logger.debug("Signal handlers not installed.", exc_info=True)

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Running scheduler only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        runner.stop()
        runner.join(timeout=10.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
