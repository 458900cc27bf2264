# tests/test_task_api.py

from __future__ import annotations

from datetime import timedelta

import pytest

from chronojobs.tasks.task_api import (
    describe_task,
    format_duration,
    message_payload,
    parse_duration,
    schedule_message,
)
from chronojobs.tasks.task_models import ZeroInterval
from chronojobs.tasks.task_scheduler import JobAlreadyExists, Scheduler

from .fakes import FakeClock, LineSink


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("30s", timedelta(seconds=30)),
        ("5m", timedelta(minutes=5)),
        (" 1H ", timedelta(hours=1)),
        ("2d", timedelta(days=2)),
        ("0s", timedelta(0)),
    ],
)
def test_parse_duration(raw: str, expected: timedelta) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "10", "1w", "-5m", "1.5h", "soon"])
def test_parse_duration_rejects_garbage(raw: str) -> None:
    assert parse_duration(raw) is None


def test_format_duration() -> None:
    assert format_duration(timedelta(days=2)) == "2d"
    assert format_duration(timedelta(hours=3)) == "3h"
    assert format_duration(timedelta(minutes=5)) == "5m"
    assert format_duration(timedelta(seconds=90)) == "90s"
    assert format_duration(timedelta(seconds=0.5)) == "0.5s"


def test_message_payload_emits_timestamped_line(clock: FakeClock, sink: LineSink) -> None:
    payload = message_payload("backup done", emit=sink, clock=clock)
    payload()
    assert sink.lines == ["[2024-01-01T12:00:00+00:00] backup done"]


def test_schedule_message_registers_task(clock: FakeClock, sink: LineSink) -> None:
    scheduler = Scheduler()
    task = schedule_message(
        scheduler,
        name="daily-report",
        message="report ready",
        every=timedelta(seconds=10),
        expire_in=timedelta(hours=1),
        emit=sink,
        clock=clock,
    )

    assert scheduler.get_job("daily-report") is task
    assert task.expire == clock.now() + timedelta(hours=1)
    assert task.is_due() is True

    scheduler.run()
    assert sink.lines == ["[2024-01-01T12:00:00+00:00] report ready"]


def test_schedule_message_accepts_seconds(clock: FakeClock, sink: LineSink) -> None:
    task = schedule_message(
        Scheduler(), name="n", message="m", every=5, expire_in=60, emit=sink, clock=clock
    )
    assert task.interval == timedelta(seconds=5)
    assert task.expire == clock.now() + timedelta(seconds=60)


def test_schedule_message_propagates_errors(clock: FakeClock, sink: LineSink) -> None:
    scheduler = Scheduler()
    schedule_message(scheduler, name="dup", message="m", every=5, expire_in=60, emit=sink, clock=clock)

    with pytest.raises(JobAlreadyExists):
        schedule_message(scheduler, name="dup", message="m", every=5, expire_in=60, emit=sink, clock=clock)
    with pytest.raises(ZeroInterval):
        schedule_message(scheduler, name="zero", message="m", every=0, expire_in=60, emit=sink, clock=clock)

    assert scheduler.names() == ["dup"]


def test_describe_task_tracks_phase(clock: FakeClock, sink: LineSink) -> None:
    task = schedule_message(
        Scheduler(), name="r", message="m", every=timedelta(minutes=5), expire_in=60, emit=sink, clock=clock
    )
    text = describe_task(task)
    assert text.startswith("r: every 5m, pending, last=never, next=now")
    assert "[expired]" not in text

    task.execute()
    text = describe_task(task)
    assert "cooling_down" in text
    assert "next=2024-01-01T12:05:00+00:00" in text

    clock.advance(timedelta(minutes=10))
    assert describe_task(task).endswith("[expired]")
