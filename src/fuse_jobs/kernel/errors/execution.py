"""Execution errors – failures of a running job or of service construction.

These never escape the scheduler loop; they are recorded and logged.
"""

from __future__ import annotations

from typing import Any

from fuse_jobs.kernel.errors.base import BaseError


class JobExecutionError(BaseError):
    """A job invocation did not complete successfully."""

    default_code = "job_execution_error"

    def __init__(self, job_name: str, message: str, **kwargs: Any) -> None:
        detail = {"job": job_name, **kwargs.pop("detail", {})}
        super().__init__(message, detail=detail, **kwargs)
        self.job_name = job_name


class HandlerExecutionError(JobExecutionError):
    """The job handler raised."""

    default_code = "handler_execution_error"


class HandlerTimeoutError(JobExecutionError):
    """The job handler exceeded its timeout."""

    default_code = "handler_timeout"

    def __init__(self, job_name: str, timeout_seconds: float, **kwargs: Any) -> None:
        super().__init__(
            job_name,
            f"Job '{job_name}' timed out after {timeout_seconds}s",
            detail={"timeout_seconds": timeout_seconds},
            **kwargs,
        )
        self.timeout_seconds = timeout_seconds


class ResolverError(BaseError):
    """Service resolver failure."""

    default_code = "resolver_error"


class UnknownServiceError(ResolverError):
    """No factory is registered for the requested key."""

    default_code = "unknown_service"

    def __init__(self, key: str) -> None:
        super().__init__(f"No service factory registered for '{key}'", detail={"key": key})
        self.key = key


class DuplicateServiceError(ResolverError):
    """A factory is already registered for the key."""

    default_code = "duplicate_service"

    def __init__(self, key: str) -> None:
        super().__init__(f"Service factory for '{key}' is already registered", detail={"key": key})
        self.key = key


class ServiceConstructionError(ResolverError):
    """The factory for a service raised."""

    default_code = "service_construction_failed"


__all__ = [
    "DuplicateServiceError",
    "HandlerExecutionError",
    "HandlerTimeoutError",
    "JobExecutionError",
    "ResolverError",
    "ServiceConstructionError",
    "UnknownServiceError",
]
