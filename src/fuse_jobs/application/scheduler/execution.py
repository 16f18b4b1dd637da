"""Application scheduler – per-job execution state and run results."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

__all__ = ["JobExecutionRecord", "JobRunResult", "RunTrigger"]


class RunTrigger(str, Enum):
    """What asked for a job invocation."""

    SCHEDULE = "schedule"
    STARTUP = "startup"
    MANUAL = "manual"


@dataclass(frozen=True)
class JobRunResult:
    """Outcome of one invocation (successful or not)."""

    job_name: str
    trigger: RunTrigger
    started_at: datetime
    duration_ms: float
    value: Any = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class JobExecutionRecord:
    """In-memory state of one job.  Never persisted."""

    job_name: str
    next_due_at: datetime
    is_running: bool = False
    last_run_at: datetime | None = None
    last_result: JobRunResult | None = None
    total_runs: int = 0
    failed_runs: int = 0
    skipped_runs: int = 0

    def is_due(self, now: datetime) -> bool:
        return self.next_due_at <= now

    def to_dict(self) -> dict[str, Any]:
        """Status snapshot for logs and admin views."""
        return {
            "job": self.job_name,
            "is_running": self.is_running,
            "next_due_at": self.next_due_at.isoformat(),
            "last_run_at": self.last_run_at.isoformat() if self.last_run_at else None,
            "last_success": self.last_result.success if self.last_result else None,
            "total_runs": self.total_runs,
            "failed_runs": self.failed_runs,
            "skipped_runs": self.skipped_runs,
        }
