"""Scheduling errors – raised while building the job table.

All of these are fatal at registration time: the process refuses to start
with a bad definition instead of discovering it on the first tick.
"""

from __future__ import annotations

from typing import Any

from fuse_jobs.kernel.errors.base import BaseError


class SchedulingError(BaseError):
    """Registration-time problem with a job or the registry."""

    default_code = "scheduling_error"


class InvalidScheduleError(SchedulingError):
    """A cron expression could not be parsed."""

    default_code = "invalid_schedule"

    def __init__(self, expression: str, reason: str | None = None, **kwargs: Any) -> None:
        msg = f"Invalid cron expression {expression!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, detail={"expression": expression}, **kwargs)
        self.expression = expression
        self.reason = reason


class InvalidJobDefinitionError(SchedulingError):
    """A job definition field is out of range."""

    default_code = "invalid_job_definition"


class DuplicateJobError(SchedulingError):
    """A job with the same name is already registered."""

    default_code = "duplicate_job"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Job '{name}' is already registered", detail={"job": name}, **kwargs)
        self.name = name


class UnknownJobError(SchedulingError):
    """No job with the given name exists in the registry."""

    default_code = "unknown_job"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Job '{name}' is not registered", detail={"job": name}, **kwargs)
        self.name = name


class RegistryFrozenError(SchedulingError):
    """The registry no longer accepts definitions (the scheduler has started)."""

    default_code = "registry_frozen"


__all__ = [
    "DuplicateJobError",
    "InvalidJobDefinitionError",
    "InvalidScheduleError",
    "RegistryFrozenError",
    "SchedulingError",
    "UnknownJobError",
]
