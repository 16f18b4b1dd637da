"""Application scheduler – SchedulerLoop.

One coordinating loop per process.  Every ``poll_interval`` seconds it
compares each job's ``next_due_at`` with the clock and dispatches the due
ones.  Ticks, startup timers and manual runs all enter through
:meth:`SchedulerLoop.request_run`, the per-job gate: if the job is already
running the request is dropped, never queued.  The gate's check-and-set has
no ``await`` in between, so it is atomic on a single event loop.

Handlers run as separate tasks.  Jobs interleave with each other but a job
never overlaps itself, and a failing or hung job only affects its own
future ticks.
"""
from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Any

from fuse_jobs.application.scheduler.cron import next_due
from fuse_jobs.application.scheduler.execution import JobExecutionRecord, JobRunResult, RunTrigger
from fuse_jobs.application.scheduler.job import JobDefinition
from fuse_jobs.application.scheduler.registry import JobRegistry
from fuse_jobs.application.scheduler.resolver import ServiceResolver
from fuse_jobs.kernel.errors import HandlerExecutionError, HandlerTimeoutError, JobExecutionError
from fuse_jobs.kernel.time import Clock, SystemClock
from fuse_jobs.observability.logging import get_logger

__all__ = ["SchedulerLoop"]

logger = get_logger(__name__)


class SchedulerLoop:
    """Polls the registry and runs due jobs without self-overlap.

    Parameters
    ----------
    registry:
        Job table.  Frozen by :meth:`start`.
    resolver:
        Service resolver shared by the job handlers.  A fresh one is created
        when omitted.
    clock:
        Time source for due-ness; defaults to :class:`SystemClock`.
    poll_interval:
        Seconds between ticks.
    run_startup_jobs:
        When false, ``run_on_startup`` is ignored.
    default_timeout:
        Per-invocation timeout in seconds for jobs that do not set their own.
    """

    def __init__(
        self,
        registry: JobRegistry,
        resolver: ServiceResolver | None = None,
        *,
        clock: Clock | None = None,
        poll_interval: float = 5.0,
        run_startup_jobs: bool = True,
        default_timeout: float | None = None,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.registry = registry
        self.resolver = resolver or ServiceResolver()
        self._clock = clock or SystemClock()
        self._poll_interval = poll_interval
        self._run_startup_jobs = run_startup_jobs
        self._default_timeout = default_timeout
        self._records: dict[str, JobExecutionRecord] = {}
        self._inflight: dict[str, asyncio.Task[JobRunResult]] = {}
        self._background: list[asyncio.Task[None]] = []
        self._started = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def records(self) -> dict[str, JobExecutionRecord]:
        return dict(self._records)

    def record(self, name: str) -> JobExecutionRecord:
        return self._record_for(self.registry.get(name), self._clock.now())

    def is_running(self, name: str) -> bool:
        record = self._records.get(name)
        return record is not None and record.is_running

    def _record_for(self, definition: JobDefinition, now: datetime) -> JobExecutionRecord:
        record = self._records.get(definition.name)
        if record is None:
            record = JobExecutionRecord(
                job_name=definition.name,
                next_due_at=next_due(definition.schedule, now),
            )
            self._records[definition.name] = record
        return record

    def prime(self) -> None:
        """Create a record for every job, due at its next cron instant after now."""
        now = self._clock.now()
        for definition in self.registry:
            self._record_for(definition, now)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if self._started:
            return
        self.registry.freeze()
        for row in self.registry.describe():
            logger.info("scheduler.job_registered", **row)
        self.prime()
        self._started = True
        self._background.append(asyncio.create_task(self._poll_forever(), name="scheduler-poll"))

        for definition in self.registry:
            if not definition.run_on_startup:
                continue
            if not self._run_startup_jobs:
                logger.info("job.startup_run_disabled", job=definition.name)
                continue
            logger.info("job.startup_run_scheduled", job=definition.name, delay_seconds=definition.startup_delay)
            self._background.append(
                asyncio.create_task(self._startup_run(definition), name=f"startup:{definition.name}")
            )
        logger.info("scheduler.started", jobs=len(self.registry), poll_interval=self._poll_interval)

    async def stop(self) -> None:
        """Cancel the poll and startup timers, then wait for running jobs."""
        if not self._started:
            return
        self._started = False
        for task in self._background:
            task.cancel()
        await asyncio.gather(*self._background, return_exceptions=True)
        self._background.clear()
        await self.wait_idle()
        logger.info("scheduler.stopped")

    async def wait_idle(self) -> None:
        """Wait until no job invocation is in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight.values()), return_exceptions=True)

    async def _poll_forever(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self._poll_interval)

    async def _startup_run(self, definition: JobDefinition) -> None:
        await asyncio.sleep(definition.startup_delay)
        self.request_run(definition.name, RunTrigger.STARTUP)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def tick(self) -> list[str]:
        """Evaluate every job once; return the names dispatched on this tick."""
        now = self._clock.now()
        dispatched: list[str] = []
        for definition in self.registry:
            if definition.name not in self._records:
                self._record_for(definition, now)
                continue
            record = self._records[definition.name]
            # a running job absorbs the tick; its next_due_at is recomputed on completion
            if record.is_running or not record.is_due(now):
                continue
            if self.request_run(definition.name, RunTrigger.SCHEDULE) is not None:
                dispatched.append(definition.name)
        logger.debug("scheduler.tick", now=now.isoformat(), dispatched=dispatched)
        return dispatched

    def request_run(self, name: str, trigger: RunTrigger) -> asyncio.Task[JobRunResult] | None:
        """Start *name* unless it is already running.

        Returns the invocation task, or ``None`` when the request was dropped.
        """
        definition = self.registry.get(name)
        record = self._record_for(definition, self._clock.now())
        if record.is_running:
            record.skipped_runs += 1
            logger.warning("job.skipped", job=name, trigger=trigger.value, reason="already_running")
            return None
        record.is_running = True
        task = asyncio.create_task(self._invoke(definition, record, trigger), name=f"job:{name}")
        self._inflight[name] = task
        return task

    async def run_now(self, name: str) -> JobRunResult | None:
        """Run *name* immediately through the gate and wait for the result."""
        task = self.request_run(name, RunTrigger.MANUAL)
        if task is None:
            return None
        return await task

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def _call(self, definition: JobDefinition) -> Any:
        timeout = definition.timeout or self._default_timeout
        if not timeout:
            return await definition.handler()
        try:
            return await asyncio.wait_for(definition.handler(), timeout=timeout)
        except (asyncio.TimeoutError, TimeoutError) as exc:
            raise HandlerTimeoutError(definition.name, timeout, cause=exc) from exc

    async def _invoke(
        self,
        definition: JobDefinition,
        record: JobExecutionRecord,
        trigger: RunTrigger,
    ) -> JobRunResult:
        log = logger.bind(job=definition.name, trigger=trigger.value)
        started_at = self._clock.now()
        t0 = time.monotonic()
        value: Any = None
        error: str | None = None
        log.info("job.started", started_at=started_at.isoformat())
        try:
            value = await self._call(definition)
        except JobExecutionError as exc:
            error = exc.message
            log.error("job.failed", failed_at=self._clock.now().isoformat(), error=exc.to_dict())
        except Exception as exc:  # noqa: BLE001
            failure = HandlerExecutionError(
                definition.name, f"Job '{definition.name}' failed: {exc!r}", cause=exc
            )
            error = failure.message
            log.error(
                "job.failed",
                failed_at=self._clock.now().isoformat(),
                error=failure.to_dict(),
                exc_info=exc,
            )
        finally:
            duration_ms = (time.monotonic() - t0) * 1000
            finished_at = self._clock.now()
            record.is_running = False
            record.last_run_at = started_at
            record.next_due_at = next_due(definition.schedule, finished_at)
            self._inflight.pop(definition.name, None)

        result = JobRunResult(
            job_name=definition.name,
            trigger=trigger,
            started_at=started_at,
            duration_ms=duration_ms,
            value=value,
            error=error,
        )
        record.last_result = result
        record.total_runs += 1
        if not result.success:
            record.failed_runs += 1
        else:
            log.info("job.completed", duration_ms=round(duration_ms, 2))
        return result
