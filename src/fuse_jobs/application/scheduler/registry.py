"""Application scheduler – JobRegistry."""
from __future__ import annotations

from typing import Iterator

from fuse_jobs.application.scheduler.job import JobDefinition
from fuse_jobs.kernel.errors import DuplicateJobError, RegistryFrozenError, UnknownJobError

__all__ = ["JobRegistry"]


class JobRegistry:
    """Ordered table of job definitions.

    Definitions are added at process start and frozen once the scheduler
    starts; reconfiguration means restarting the process.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, JobDefinition] = {}
        self._frozen = False

    def register(self, definition: JobDefinition) -> JobDefinition:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{definition.name}': registry is frozen"
            )
        if definition.name in self._jobs:
            raise DuplicateJobError(definition.name)
        self._jobs[definition.name] = definition
        return definition

    def get(self, name: str) -> JobDefinition:
        try:
            return self._jobs[name]
        except KeyError:
            raise UnknownJobError(name) from None

    def list(self) -> tuple[JobDefinition, ...]:
        """All definitions in registration order."""
        return tuple(self._jobs.values())

    def names(self) -> list[str]:
        return list(self._jobs)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def describe(self) -> list[dict[str, object]]:
        """Rows for the startup registration table."""
        return [
            {
                "job": d.name,
                "schedule": d.schedule,
                "description": d.description,
                "run_on_startup": d.run_on_startup,
            }
            for d in self._jobs.values()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._jobs

    def __iter__(self) -> Iterator[JobDefinition]:
        return iter(tuple(self._jobs.values()))

    def __len__(self) -> int:
        return len(self._jobs)
