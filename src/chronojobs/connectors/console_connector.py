# src/chronojobs/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one console line to the command registry under the scheduler lock.

    Returns the reply to print, or None for an empty line.
    """
    line = line.strip()
    if not line:
        return None

    if not line.startswith("/"):
        return "Not a command. Use /help to list available commands."

    try:
        with state.lock:
            return command_registry.handle(state, line, emit=state.emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Manage jobs with slash commands. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
