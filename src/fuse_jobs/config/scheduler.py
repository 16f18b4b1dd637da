"""Config – SchedulerSettings for the job process.

Every field can be set from the environment as ``FUSE_JOBS_<FIELD>``, e.g.
``FUSE_JOBS_POLL_INTERVAL_SECONDS=2``.
"""
from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import ClassVar

from fuse_jobs.config.settings.base import Settings
from fuse_jobs.config.validation import InvalidSettingValueError


class DeliveryGuarantee(str, Enum):
    """Ordering of recovery dispatch and trigger-record write."""

    AT_LEAST_ONCE = "at_least_once"  # dispatch, then record
    AT_MOST_ONCE = "at_most_once"    # record, then dispatch


@dataclasses.dataclass
class SchedulerSettings(Settings):
    _prefix: ClassVar[str] = "FUSE_JOBS"

    poll_interval_seconds: float = 5.0
    run_startup_jobs: bool = False
    job_timeout_seconds: float = 0.0
    log_level: str = "INFO"
    log_json: bool = True

    abandoned_checkout_schedule: str = "0 * * * *"
    abandoned_checkout_lookback_hours: float = 24.0
    abandoned_checkout_threshold_hours: float = 1.0
    recovery_delivery: str = DeliveryGuarantee.AT_LEAST_ONCE.value

    ticket_auto_close_schedule: str = "0 2 * * *"
    ticket_auto_close_startup_delay_seconds: float = 10.0
    ticket_inactivity_days: float = 3.0

    def _validate(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise InvalidSettingValueError(
                "poll_interval_seconds", self.poll_interval_seconds, "must be positive"
            )
        if self.job_timeout_seconds < 0:
            raise InvalidSettingValueError(
                "job_timeout_seconds", self.job_timeout_seconds, "must be >= 0 (0 disables)"
            )
        if self.abandoned_checkout_lookback_hours <= 0:
            raise InvalidSettingValueError(
                "abandoned_checkout_lookback_hours",
                self.abandoned_checkout_lookback_hours,
                "must be positive",
            )
        if not 0 <= self.abandoned_checkout_threshold_hours < self.abandoned_checkout_lookback_hours:
            raise InvalidSettingValueError(
                "abandoned_checkout_threshold_hours",
                self.abandoned_checkout_threshold_hours,
                "must be >= 0 and smaller than the lookback window",
            )
        if self.ticket_auto_close_startup_delay_seconds < 0:
            raise InvalidSettingValueError(
                "ticket_auto_close_startup_delay_seconds",
                self.ticket_auto_close_startup_delay_seconds,
                "must be >= 0",
            )
        if self.ticket_inactivity_days <= 0:
            raise InvalidSettingValueError(
                "ticket_inactivity_days", self.ticket_inactivity_days, "must be positive"
            )
        try:
            DeliveryGuarantee(self.recovery_delivery)
        except ValueError as exc:
            raise InvalidSettingValueError(
                "recovery_delivery",
                self.recovery_delivery,
                f"expected one of {[g.value for g in DeliveryGuarantee]}",
            ) from exc
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")

    @property
    def delivery_guarantee(self) -> DeliveryGuarantee:
        return DeliveryGuarantee(self.recovery_delivery)

    @property
    def job_timeout(self) -> float | None:
        return self.job_timeout_seconds or None

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["DeliveryGuarantee", "SchedulerSettings"]
