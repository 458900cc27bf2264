# src/chronojobs/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..tasks.task_scheduler import Scheduler
from .ports import Clock, Emitter


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object
    scheduler: Scheduler
    clock: Clock

    # Serializes every scheduler access: console commands and driver ticks.
    lock: threading.RLock = field(default_factory=threading.RLock)
    emit: Emitter = print
