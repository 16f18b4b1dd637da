"""Bootstrap – wire settings, collaborators, jobs and the scheduler loop."""
from __future__ import annotations

import asyncio
import dataclasses
from datetime import timedelta

from fuse_jobs.application.engines import AbandonedCheckoutService, TicketAutoCloseService
from fuse_jobs.application.jobs import AbandonedCheckoutJob, TicketAutoCloseJob
from fuse_jobs.application.ports import (
    AuditLog,
    CheckoutSessionStore,
    RecoveryMessenger,
    SupportTicketStore,
)
from fuse_jobs.application.scheduler import JobRegistry, SchedulerLoop, ServiceResolver
from fuse_jobs.config import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SchedulerSettings,
    SettingsFactory,
    SettingsLoader,
)
from fuse_jobs.kernel.time import Clock, SystemClock
from fuse_jobs.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["Collaborators", "build_scheduler", "load_settings", "run"]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class Collaborators:
    """External adapters the engines depend on."""

    checkout_store: CheckoutSessionStore
    messenger: RecoveryMessenger
    ticket_store: SupportTicketStore
    audit_log: AuditLog


def load_settings(env_file: str | None = None, **overrides: object) -> SchedulerSettings:
    """Environment (optionally preceded by a ``.env`` file), then *overrides*."""
    loader: SettingsLoader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
    return SettingsFactory.create(SchedulerSettings, loaders=[loader], overrides=dict(overrides))


def build_scheduler(
    settings: SchedulerSettings,
    collaborators: Collaborators,
    *,
    clock: Clock | None = None,
) -> SchedulerLoop:
    """Register both jobs and return an unstarted loop.

    Raises ``InvalidScheduleError`` / ``DuplicateJobError`` before anything runs.
    """
    clock = clock or SystemClock()
    resolver = ServiceResolver()
    resolver.register(
        AbandonedCheckoutJob.name,
        lambda: AbandonedCheckoutService(
            collaborators.checkout_store,
            collaborators.messenger,
            clock=clock,
            delivery=settings.delivery_guarantee,
        ),
    )
    resolver.register(
        TicketAutoCloseJob.name,
        lambda: TicketAutoCloseService(
            collaborators.ticket_store,
            collaborators.audit_log,
            clock=clock,
            inactivity=timedelta(days=settings.ticket_inactivity_days),
        ),
    )

    registry = JobRegistry()
    registry.register(
        AbandonedCheckoutJob(
            resolver,
            lookback_hours=settings.abandoned_checkout_lookback_hours,
            abandonment_threshold_hours=settings.abandoned_checkout_threshold_hours,
        ).definition(settings.abandoned_checkout_schedule)
    )
    registry.register(
        TicketAutoCloseJob(resolver).definition(
            settings.ticket_auto_close_schedule,
            run_on_startup=True,
            startup_delay=settings.ticket_auto_close_startup_delay_seconds,
        )
    )
    return SchedulerLoop(
        registry,
        resolver,
        clock=clock,
        poll_interval=settings.poll_interval_seconds,
        run_startup_jobs=settings.run_startup_jobs,
        default_timeout=settings.job_timeout,
    )


async def run(settings: SchedulerSettings, collaborators: Collaborators) -> None:
    """Configure logging, start the loop and keep it running until cancelled."""
    JsonLoggerFactory.configure(level=settings.log_level_number, json=settings.log_json)
    scheduler = build_scheduler(settings, collaborators)
    logger.info("fuse_jobs.starting", run_startup_jobs=settings.run_startup_jobs, delivery=settings.recovery_delivery)
    await scheduler.start()
    try:
        await asyncio.Event().wait()
    finally:
        await scheduler.stop()
