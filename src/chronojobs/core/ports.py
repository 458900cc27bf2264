# src/chronojobs/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Tasks depend on Protocols instead of concrete implementations.
This keeps the time source and the task actions swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

Payload = Callable[[], None]
# Zero-argument action executed by a task. Failures are the payload's own concern.

Emitter = Callable[[str], None]


class Clock(Protocol):
    """Source of "now". Must return timezone-aware datetimes."""
    def now(self) -> datetime: ...
