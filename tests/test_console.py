# tests/test_console.py

from __future__ import annotations

from datetime import timedelta

import pytest

from chronojobs.connectors.console_connector import handle_line, run_console_loop
from chronojobs.tasks.task_models import Task

from .fakes import ExplodingPayload


def test_handle_line_routes_commands(state) -> None:
    assert handle_line(state, "   ") is None
    assert "Not a command" in (handle_line(state, "hello") or "")
    assert handle_line(state, "/jobs") == "No jobs registered."


def test_handle_line_contains_payload_failure(state) -> None:
    state.scheduler.add_job(
        Task("bad", state.clock.now() + timedelta(hours=1), 5, ExplodingPayload(), clock=state.clock)
    )
    assert handle_line(state, "/tick") == "Internal error while handling a command."
    assert "bad" in state.scheduler


def test_console_loop_until_exit(state, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    lines = iter(["/add ping 1m 1h pong", "/jobs", "/exit", "/never"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Job ping added" in out
    assert "ping: every 1m, pending" in out
    assert "ping" in state.scheduler


def test_console_loop_stops_on_eof(state, monkeypatch: pytest.MonkeyPatch) -> None:
    def _eof(_prompt: str = "") -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    run_console_loop(state)
