"""Processing errors – per-entity failures inside an engine batch."""

from __future__ import annotations

from typing import Any

from fuse_jobs.kernel.errors.base import BaseError


class ProcessingError(BaseError):
    """An engine could not process its input."""

    default_code = "processing_error"


class PerEntityProcessingError(ProcessingError):
    """One checkout session or ticket failed; the rest of the batch continues."""

    default_code = "per_entity_processing_error"

    def __init__(self, entity_type: str, entity_id: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"Failed to process {entity_type} '{entity_id}'",
            detail={"entity_type": entity_type, "entity_id": entity_id},
            **kwargs,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


__all__ = ["PerEntityProcessingError", "ProcessingError"]
