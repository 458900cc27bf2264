"""chronojobs: in-memory registry of recurring, expiring tasks polled by a driver."""

from .tasks.task_models import ExpirationInPast, Task, TaskError, TaskPhase, ZeroInterval
from .tasks.task_scheduler import JobAlreadyExists, JobDoesntExist, Scheduler, SchedulerError

__all__ = [
    "Task",
    "TaskPhase",
    "TaskError",
    "ExpirationInPast",
    "ZeroInterval",
    "Scheduler",
    "SchedulerError",
    "JobAlreadyExists",
    "JobDoesntExist",
]
