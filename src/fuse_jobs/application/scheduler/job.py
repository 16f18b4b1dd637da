"""Application scheduler – JobDefinition dataclass."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fuse_jobs.application.scheduler.cron import validate_schedule
from fuse_jobs.kernel.errors import InvalidJobDefinitionError

__all__ = ["JobDefinition", "JobHandler"]

JobHandler = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class JobDefinition:
    """Describes a scheduled job.  Registered once, never mutated."""

    name: str
    schedule: str                 # e.g. "0 2 * * *", UTC
    handler: JobHandler
    description: str = ""
    run_on_startup: bool = False
    startup_delay: float = 10.0   # seconds after start for the startup run
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidJobDefinitionError("Job name must be a non-empty string")
        if not callable(self.handler):
            raise InvalidJobDefinitionError(f"Job '{self.name}' handler is not callable")
        if self.startup_delay < 0:
            raise InvalidJobDefinitionError(
                f"Job '{self.name}' startup_delay must be >= 0, got {self.startup_delay}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise InvalidJobDefinitionError(
                f"Job '{self.name}' timeout must be positive, got {self.timeout}"
            )
        object.__setattr__(self, "schedule", validate_schedule(self.schedule))
