"""Application scheduler – job table, cron evaluation, loop and service resolver."""
from fuse_jobs.application.scheduler.cron import next_due, validate_schedule
from fuse_jobs.application.scheduler.execution import JobExecutionRecord, JobRunResult, RunTrigger
from fuse_jobs.application.scheduler.job import JobDefinition, JobHandler
from fuse_jobs.application.scheduler.loop import SchedulerLoop
from fuse_jobs.application.scheduler.registry import JobRegistry
from fuse_jobs.application.scheduler.resolver import ServiceFactory, ServiceResolver

__all__ = [
    "JobDefinition",
    "JobExecutionRecord",
    "JobHandler",
    "JobRegistry",
    "JobRunResult",
    "RunTrigger",
    "SchedulerLoop",
    "ServiceFactory",
    "ServiceResolver",
    "next_due",
    "validate_schedule",
]
