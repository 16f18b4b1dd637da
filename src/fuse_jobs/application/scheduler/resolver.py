"""Application scheduler – ServiceResolver.

Job handlers do not build their services at import or bootstrap time.  The
scheduler owns one resolver; each handler asks it for its service on every
invocation and the first call constructs it.  Construction runs as its own
task stored under the key, so concurrent first calls await the same
construction, and cancelling one caller leaves it running for the others.
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable

from fuse_jobs.kernel.errors import (
    DuplicateServiceError,
    ServiceConstructionError,
    UnknownServiceError,
)
from fuse_jobs.observability.logging import get_logger

__all__ = ["ServiceFactory", "ServiceResolver"]

logger = get_logger(__name__)

ServiceFactory = Callable[[], Any]


class ServiceResolver:
    """Lazy, memoized, single-flight service construction keyed by name."""

    def __init__(self) -> None:
        self._factories: dict[str, ServiceFactory] = {}
        self._instances: dict[str, asyncio.Task[Any]] = {}

    def register(self, key: str, factory: ServiceFactory) -> None:
        """Register a sync or async zero-argument *factory* for *key*."""
        if key in self._factories:
            raise DuplicateServiceError(key)
        self._factories[key] = factory

    def is_registered(self, key: str) -> bool:
        return key in self._factories

    def is_constructed(self, key: str) -> bool:
        task = self._instances.get(key)
        return (
            task is not None
            and task.done()
            and not task.cancelled()
            and task.exception() is None
        )

    async def resolve(self, key: str) -> Any:
        task = self._instances.get(key)
        if task is None:
            try:
                factory = self._factories[key]
            except KeyError:
                raise UnknownServiceError(key) from None
            task = asyncio.ensure_future(self._construct(key, factory))
            self._instances[key] = task
        # shield: a cancelled caller must not cancel the shared construction
        return await asyncio.shield(task)

    async def _construct(self, key: str, factory: ServiceFactory) -> Any:
        try:
            instance = factory()
            if inspect.isawaitable(instance):
                instance = await instance
        except asyncio.CancelledError:
            self._instances.pop(key, None)
            raise
        except Exception as exc:  # noqa: BLE001
            # evict so the next invocation retries construction
            self._instances.pop(key, None)
            logger.error("resolver.construction_failed", service=key, error=repr(exc))
            raise ServiceConstructionError(
                f"Failed to construct service '{key}'", detail={"key": key}, cause=exc
            ) from exc
        logger.info("resolver.constructed", service=key, service_type=type(instance).__name__)
        return instance
