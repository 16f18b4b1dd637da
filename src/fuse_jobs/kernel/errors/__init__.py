"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── SchedulingError            (scheduling.py)
    │   ├── InvalidScheduleError
    │   ├── InvalidJobDefinitionError
    │   ├── DuplicateJobError
    │   ├── UnknownJobError
    │   └── RegistryFrozenError
    ├── JobExecutionError          (execution.py)
    │   ├── HandlerExecutionError
    │   └── HandlerTimeoutError
    ├── ResolverError              (execution.py)
    │   ├── UnknownServiceError
    │   ├── DuplicateServiceError
    │   └── ServiceConstructionError
    ├── ProcessingError            (processing.py)
    │   └── PerEntityProcessingError
    └── InfrastructureError        (infrastructure.py)
        └── ExternalServiceError
"""

from fuse_jobs.kernel.errors.base import BaseError
from fuse_jobs.kernel.errors.execution import (
    DuplicateServiceError,
    HandlerExecutionError,
    HandlerTimeoutError,
    JobExecutionError,
    ResolverError,
    ServiceConstructionError,
    UnknownServiceError,
)
from fuse_jobs.kernel.errors.infrastructure import ExternalServiceError, InfrastructureError
from fuse_jobs.kernel.errors.processing import PerEntityProcessingError, ProcessingError
from fuse_jobs.kernel.errors.scheduling import (
    DuplicateJobError,
    InvalidJobDefinitionError,
    InvalidScheduleError,
    RegistryFrozenError,
    SchedulingError,
    UnknownJobError,
)

__all__ = [
    "BaseError",
    "DuplicateJobError",
    "DuplicateServiceError",
    "ExternalServiceError",
    "HandlerExecutionError",
    "HandlerTimeoutError",
    "InfrastructureError",
    "InvalidJobDefinitionError",
    "InvalidScheduleError",
    "JobExecutionError",
    "PerEntityProcessingError",
    "ProcessingError",
    "RegistryFrozenError",
    "ResolverError",
    "SchedulingError",
    "ServiceConstructionError",
    "UnknownJobError",
    "UnknownServiceError",
]
