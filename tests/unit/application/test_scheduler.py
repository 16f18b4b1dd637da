"""Unit tests for the scheduler primitives – cron evaluation, JobDefinition, JobRegistry."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from fuse_jobs.application.scheduler import (
    JobDefinition,
    JobRegistry,
    next_due,
    validate_schedule,
)
from fuse_jobs.kernel.errors import (
    DuplicateJobError,
    InvalidJobDefinitionError,
    InvalidScheduleError,
    RegistryFrozenError,
    SchedulingError,
    UnknownJobError,
)


async def _noop() -> None:
    return None


# ---------------------------------------------------------------------------
# next_due
# ---------------------------------------------------------------------------
class TestNextDue:
    def test_daily_at_two_same_day(self):
        after = datetime(2026, 3, 1, 1, 30, tzinfo=UTC)
        assert next_due("0 2 * * *", after) == datetime(2026, 3, 1, 2, 0, tzinfo=UTC)

    def test_strictly_after_reference(self):
        after = datetime(2026, 3, 1, 2, 0, tzinfo=UTC)
        assert next_due("0 2 * * *", after) == datetime(2026, 3, 2, 2, 0, tzinfo=UTC)

    def test_sub_second_past_match_moves_to_next_day(self):
        after = datetime(2026, 3, 1, 2, 0, 0, 500_000, tzinfo=UTC)
        assert next_due("0 2 * * *", after) == datetime(2026, 3, 2, 2, 0, tzinfo=UTC)

    def test_hourly(self):
        after = datetime(2026, 3, 1, 10, 0, 1, tzinfo=UTC)
        assert next_due("0 * * * *", after) == datetime(2026, 3, 1, 11, 0, tzinfo=UTC)

    def test_step_minutes(self):
        after = datetime(2026, 3, 1, 10, 7, tzinfo=UTC)
        assert next_due("*/15 * * * *", after) == datetime(2026, 3, 1, 10, 15, tzinfo=UTC)

    def test_every_two_hours(self):
        after = datetime(2026, 3, 1, 1, 0, tzinfo=UTC)
        assert next_due("0 */2 * * *", after) == datetime(2026, 3, 1, 2, 0, tzinfo=UTC)

    def test_day_of_month_and_weekday_are_or_combined(self):
        # 2026-03-01 is a Sunday; Friday 6th comes before the 10th
        after = datetime(2026, 3, 1, 0, 0, tzinfo=UTC)
        assert next_due("0 0 10 * 5", after) == datetime(2026, 3, 6, 0, 0, tzinfo=UTC)
        after = datetime(2026, 3, 6, 0, 0, tzinfo=UTC)
        assert next_due("0 0 10 * 5", after) == datetime(2026, 3, 10, 0, 0, tzinfo=UTC)

    def test_naive_reference_is_utc(self):
        after = datetime(2026, 3, 1, 1, 30)
        result = next_due("0 2 * * *", after)
        assert result == datetime(2026, 3, 1, 2, 0, tzinfo=UTC)
        assert result.utcoffset() == timedelta(0)

    def test_aware_non_utc_reference_is_converted(self):
        plus_two = timezone(timedelta(hours=2))
        after = datetime(2026, 3, 1, 3, 30, tzinfo=plus_two)  # 01:30 UTC
        assert next_due("0 2 * * *", after) == datetime(2026, 3, 1, 2, 0, tzinfo=UTC)

    def test_month_rollover(self):
        after = datetime(2026, 12, 31, 23, 59, tzinfo=UTC)
        assert next_due("0 0 1 * *", after) == datetime(2027, 1, 1, 0, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "expression",
        ["0 2 * *", "0 2 * * * *", "", "61 * * * *", "0 25 * * *", "not a cron at all"],
    )
    def test_malformed_expression_raises(self, expression):
        with pytest.raises(InvalidScheduleError):
            next_due(expression, datetime(2026, 3, 1, tzinfo=UTC))


class TestValidateSchedule:
    def test_normalises_whitespace(self):
        assert validate_schedule("  0   2 * *  * ") == "0 2 * * *"

    def test_error_carries_expression(self):
        with pytest.raises(InvalidScheduleError) as info:
            validate_schedule("0 2 * *")
        assert info.value.expression == "0 2 * *"
        assert info.value.detail == {"expression": "0 2 * *"}
        assert "expected 5 fields" in info.value.message

    def test_is_scheduling_error(self):
        with pytest.raises(SchedulingError):
            validate_schedule("nope")

    def test_expression_that_never_fires_is_rejected(self):
        with pytest.raises(InvalidScheduleError):
            validate_schedule("0 0 31 2 *")

    def test_leap_day_is_accepted(self):
        assert validate_schedule("0 0 29 2 *") == "0 0 29 2 *"


# ---------------------------------------------------------------------------
# JobDefinition
# ---------------------------------------------------------------------------
class TestJobDefinition:
    def test_defaults(self):
        job = JobDefinition(name="daily", schedule="0 2 * * *", handler=_noop)
        assert job.run_on_startup is False
        assert job.startup_delay == 10.0
        assert job.timeout is None
        assert job.description == ""

    def test_schedule_is_normalised(self):
        job = JobDefinition(name="daily", schedule="0  2 * * *", handler=_noop)
        assert job.schedule == "0 2 * * *"

    def test_invalid_schedule_rejected_at_construction(self):
        with pytest.raises(InvalidScheduleError):
            JobDefinition(name="bad", schedule="every day", handler=_noop)

    def test_impossible_date_rejected_at_construction(self):
        with pytest.raises(InvalidScheduleError):
            JobDefinition(name="feb31", schedule="0 0 31 2 *", handler=_noop)

    def test_negative_startup_delay_rejected(self):
        with pytest.raises(InvalidJobDefinitionError):
            JobDefinition(name="x", schedule="* * * * *", handler=_noop, startup_delay=-1)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(InvalidJobDefinitionError):
            JobDefinition(name="x", schedule="* * * * *", handler=_noop, timeout=0)

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidJobDefinitionError):
            JobDefinition(name="  ", schedule="* * * * *", handler=_noop)

    def test_is_immutable(self):
        job = JobDefinition(name="x", schedule="* * * * *", handler=_noop)
        with pytest.raises((AttributeError, TypeError)):
            job.name = "y"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# JobRegistry
# ---------------------------------------------------------------------------
class TestJobRegistry:
    def _job(self, name: str, **kwargs) -> JobDefinition:
        return JobDefinition(name=name, schedule="0 * * * *", handler=_noop, **kwargs)

    def test_list_preserves_registration_order(self):
        registry = JobRegistry()
        for name in ("c", "a", "b"):
            registry.register(self._job(name))
        assert [d.name for d in registry.list()] == ["c", "a", "b"]
        assert registry.names() == ["c", "a", "b"]

    def test_list_is_immutable_snapshot(self):
        registry = JobRegistry()
        registry.register(self._job("a"))
        listed = registry.list()
        assert isinstance(listed, tuple)
        registry.register(self._job("b"))
        assert len(listed) == 1

    def test_duplicate_name_rejected(self):
        registry = JobRegistry()
        registry.register(self._job("a"))
        with pytest.raises(DuplicateJobError) as info:
            registry.register(self._job("a"))
        assert info.value.name == "a"
        assert len(registry) == 1

    def test_get_unknown_raises(self):
        with pytest.raises(UnknownJobError):
            JobRegistry().get("ghost")

    def test_contains_and_len(self):
        registry = JobRegistry()
        registry.register(self._job("a"))
        assert "a" in registry
        assert "b" not in registry
        assert len(registry) == 1

    def test_frozen_registry_rejects_registration(self):
        registry = JobRegistry()
        registry.freeze()
        assert registry.is_frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(self._job("late"))

    def test_describe_rows(self):
        registry = JobRegistry()
        registry.register(self._job("a", description="Does A", run_on_startup=True))
        assert registry.describe() == [
            {"job": "a", "schedule": "0 * * * *", "description": "Does A", "run_on_startup": True}
        ]
