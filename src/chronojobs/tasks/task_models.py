# src/chronojobs/tasks/task_models.py

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from ..core.clock import SYSTEM_CLOCK
from ..core.ports import Clock, Payload


class TaskError(Exception):
    """Base class for invalid task parameters."""


class ExpirationInPast(TaskError):
    def __init__(self, expire: datetime) -> None:
        super().__init__(f"Task expiration date is in the past: {expire.isoformat()}")
        self.expire = expire


class ZeroInterval(TaskError):
    def __init__(self) -> None:
        super().__init__("Task interval must be greater than zero")


class TaskPhase(StrEnum):
    """
    Where a task stands on the execution axis.

    Expiration is orthogonal to this (see Task.should_remove): a task can be
    DUE and expired at the same time.
    """

    PENDING = "pending"  # never executed
    COOLING_DOWN = "cooling_down"
    DUE = "due"


def _as_interval(interval: timedelta | float | int) -> timedelta:
    if isinstance(interval, timedelta):
        return interval
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        raise TypeError(f"interval must be a timedelta or seconds, got {type(interval).__name__}")
    return timedelta(seconds=interval)


def _require_aware(value: datetime, what: str) -> datetime:
    if not isinstance(value, datetime):
        raise TypeError(f"{what} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{what} must be timezone-aware")
    return value


class Task:
    """
    A named recurring action with a run interval and an absolute expiration.

    Invariants:
    - interval > 0, fixed at construction
    - expire is strictly in the future whenever it is set (construction / update_expiration)
    - last_run is None until the first execute(), then only moves forward

    All time predicates read "now" from the injected clock.
    """

    __slots__ = ("_name", "_expire", "_interval", "_payload", "_last_run", "_clock")

    def __init__(
        self,
        name: str,
        expire: datetime,
        interval: timedelta | float | int,
        payload: Payload,
        *,
        clock: Clock | None = None,
    ) -> None:
        # name is the registry key; stored exactly as given.
        if not isinstance(name, str):
            raise TypeError(f"name must be a str, got {type(name).__name__}")
        if not name.strip():
            raise ValueError("name is required")
        if not callable(payload):
            raise TypeError("payload must be callable")

        self._clock: Clock = clock or SYSTEM_CLOCK

        expire = _require_aware(expire, "expire")
        if self._is_in_the_past(expire):
            raise ExpirationInPast(expire)

        interval = _as_interval(interval)
        if interval <= timedelta(0):
            raise ZeroInterval()

        self._name = name
        self._expire = expire
        self._interval = interval
        self._payload = payload
        self._last_run: datetime | None = None

    def __repr__(self) -> str:
        last = self._last_run.isoformat() if self._last_run else None
        return (
            f"Task(name={self._name!r}, expire={self._expire.isoformat()}, "
            f"interval={self._interval}, last_run={last})"
        )

    # ---- read-only projections ----

    @property
    def name(self) -> str:
        return self._name

    @property
    def expire(self) -> datetime:
        return self._expire

    @property
    def interval(self) -> timedelta:
        return self._interval

    @property
    def payload(self) -> Payload:
        return self._payload

    @property
    def last_run(self) -> datetime | None:
        return self._last_run

    # ---- time predicates ----

    def _is_in_the_past(self, value: datetime) -> bool:
        # "strictly after now" is required, so now itself counts as past.
        return value <= self._clock.now()

    def next_run_time(self) -> datetime | None:
        """When the task becomes due again. None means it has never run and is due now."""
        if self._last_run is None:
            return None
        return self._last_run + self._interval

    def is_due(self) -> bool:
        next_run = self.next_run_time()
        if next_run is None:
            return True
        return self._clock.now() >= next_run

    def should_remove(self) -> bool:
        return self._clock.now() >= self._expire

    def phase(self) -> TaskPhase:
        if self._last_run is None:
            return TaskPhase.PENDING
        if self.is_due():
            return TaskPhase.DUE
        return TaskPhase.COOLING_DOWN

    # ---- mutators ----

    def execute(self) -> None:
        """
        Run the payload and stamp last_run.

        Does not consult is_due(); the caller decides. Payload exceptions propagate
        and leave last_run untouched.
        """
        self._payload()
        ran_at = self._clock.now()
        if self._last_run is None or ran_at >= self._last_run:
            self._last_run = ran_at

    def update_expiration(self, expire: datetime) -> None:
        """
        Re-arm the task with a new expiration. Only expire changes.

        Legal even when the old expiration has already passed but the task has not
        been evicted yet.
        """
        expire = _require_aware(expire, "expire")
        if self._is_in_the_past(expire):
            raise ExpirationInPast(expire)
        self._expire = expire
