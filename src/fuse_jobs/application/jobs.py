"""Application jobs – the typed handler variants registered at startup.

Each variant resolves its backing service through the scheduler's
:class:`ServiceResolver` on every run, so the service is built on the first
invocation and reused afterwards.
"""
from __future__ import annotations

import abc
from typing import Any

from fuse_jobs.application.engines import (
    AbandonedCheckoutService,
    AbandonedCheckoutSummary,
    TicketAutoCloseService,
    TicketAutoCloseSummary,
)
from fuse_jobs.application.scheduler import JobDefinition, ServiceResolver

__all__ = ["AbandonedCheckoutJob", "ScheduledJob", "TicketAutoCloseJob"]


class ScheduledJob(abc.ABC):
    """A named unit of recurring work with an ``execute`` capability."""

    name: str
    description: str

    def __init__(self, resolver: ServiceResolver) -> None:
        self._resolver = resolver

    @abc.abstractmethod
    async def execute(self) -> Any: ...

    def definition(
        self,
        schedule: str,
        *,
        run_on_startup: bool = False,
        startup_delay: float = 10.0,
        timeout: float | None = None,
    ) -> JobDefinition:
        return JobDefinition(
            name=self.name,
            schedule=schedule,
            handler=self.execute,
            description=self.description,
            run_on_startup=run_on_startup,
            startup_delay=startup_delay,
            timeout=timeout,
        )


class AbandonedCheckoutJob(ScheduledJob):
    name = "abandoned-checkout"
    description = "Detect abandoned checkouts and trigger recovery sequences"

    def __init__(
        self,
        resolver: ServiceResolver,
        *,
        lookback_hours: float = 24,
        abandonment_threshold_hours: float = 1,
    ) -> None:
        super().__init__(resolver)
        self.lookback_hours = lookback_hours
        self.abandonment_threshold_hours = abandonment_threshold_hours

    async def execute(self) -> AbandonedCheckoutSummary:
        service: AbandonedCheckoutService = await self._resolver.resolve(self.name)
        return await service.process_abandoned_sessions(
            self.lookback_hours, self.abandonment_threshold_hours
        )


class TicketAutoCloseJob(ScheduledJob):
    name = "ticket-auto-close"
    description = "Auto-close resolved support tickets after the inactivity period"

    async def execute(self) -> TicketAutoCloseSummary:
        service: TicketAutoCloseService = await self._resolver.resolve(self.name)
        return await service.check_and_close_resolved_tickets()
