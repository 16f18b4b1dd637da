"""Observability – structured logging helpers."""
from fuse_jobs.observability.logging.factory import JsonLoggerFactory
from fuse_jobs.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from fuse_jobs.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
