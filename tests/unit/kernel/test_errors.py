"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from fuse_jobs.kernel.errors import (
    BaseError,
    DuplicateJobError,
    ExternalServiceError,
    HandlerExecutionError,
    HandlerTimeoutError,
    InfrastructureError,
    InvalidScheduleError,
    JobExecutionError,
    PerEntityProcessingError,
    ProcessingError,
    SchedulingError,
    UnknownJobError,
)


# ---------------------------------------------------------------------------
# BaseError
# ---------------------------------------------------------------------------


class TestBaseError:
    def test_default_code(self) -> None:
        err = BaseError("boom")
        assert err.code == "base_error"
        assert err.message == "boom"
        assert err.detail == {}

    def test_custom_code_and_detail(self) -> None:
        err = BaseError("boom", code="custom", detail={"k": 1})
        assert err.to_dict() == {"code": "custom", "message": "boom", "detail": {"k": 1}}

    def test_cause_is_chained(self) -> None:
        cause = ValueError("root")
        err = BaseError("wrapped", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == repr(cause)

    def test_str_is_json(self) -> None:
        err = BaseError("boom", detail={"when": "now"})
        assert json.loads(str(err))["message"] == "boom"

    def test_repr(self) -> None:
        assert repr(BaseError("boom")) == "BaseError(code='base_error', message='boom')"


# ---------------------------------------------------------------------------
# Scheduling errors
# ---------------------------------------------------------------------------


class TestSchedulingErrors:
    def test_invalid_schedule(self) -> None:
        err = InvalidScheduleError("0 2 *", "expected 5 fields, got 3")
        assert isinstance(err, SchedulingError)
        assert err.code == "invalid_schedule"
        assert "0 2 *" in err.message
        assert "expected 5 fields" in err.message

    def test_duplicate_job(self) -> None:
        err = DuplicateJobError("nightly")
        assert err.detail == {"job": "nightly"}
        assert err.code == "duplicate_job"

    def test_unknown_job(self) -> None:
        assert UnknownJobError("x").name == "x"


# ---------------------------------------------------------------------------
# Execution and processing errors
# ---------------------------------------------------------------------------


class TestExecutionErrors:
    def test_handler_execution_error_carries_job(self) -> None:
        err = HandlerExecutionError("nightly", "failed", cause=RuntimeError("x"))
        assert isinstance(err, JobExecutionError)
        assert err.job_name == "nightly"
        assert err.detail == {"job": "nightly"}

    def test_timeout_detail(self) -> None:
        err = HandlerTimeoutError("nightly", 1.5)
        assert err.detail == {"job": "nightly", "timeout_seconds": 1.5}
        assert err.message == "Job 'nightly' timed out after 1.5s"

    def test_per_entity_error(self) -> None:
        err = PerEntityProcessingError("support_ticket", "t1")
        assert isinstance(err, ProcessingError)
        assert err.detail == {"entity_type": "support_ticket", "entity_id": "t1"}
        assert err.message == "Failed to process support_ticket 't1'"

    def test_external_service_error(self) -> None:
        err = ExternalServiceError("ticket-store", status_code=503)
        assert isinstance(err, InfrastructureError)
        assert err.service == "ticket-store"
        assert err.status_code == 503

    @pytest.mark.parametrize(
        "cls",
        [SchedulingError, JobExecutionError, ProcessingError, InfrastructureError],
    )
    def test_all_rooted_at_base_error(self, cls: type) -> None:
        assert issubclass(cls, BaseError)
