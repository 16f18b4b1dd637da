"""Application scheduler – cron schedule evaluation.

Expressions are standard 5-field crontab strings (minute, hour,
day-of-month, month, day-of-week) evaluated in UTC.  When both
day-of-month and day-of-week are restricted a day matches if *either*
matches, as in Vixie cron.
"""
from __future__ import annotations

from datetime import UTC, datetime

from croniter import croniter  # type: ignore[import-untyped]

from fuse_jobs.kernel.errors import InvalidScheduleError

__all__ = ["next_due", "validate_schedule"]

_FIELD_COUNT = 5


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def validate_schedule(expression: str) -> str:
    """Return the whitespace-normalised expression or raise ``InvalidScheduleError``."""
    if not isinstance(expression, str):
        raise InvalidScheduleError(repr(expression), "expression must be a string")
    fields = expression.split()
    if len(fields) != _FIELD_COUNT:
        raise InvalidScheduleError(
            expression, f"expected {_FIELD_COUNT} fields, got {len(fields)}"
        )
    normalised = " ".join(fields)
    try:
        # an expression that can never fire (e.g. Feb 31) only fails on get_next
        croniter(normalised, datetime(2000, 1, 1, tzinfo=UTC)).get_next(datetime)
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidScheduleError(expression, str(exc), cause=exc) from exc
    return normalised


def next_due(expression: str, after: datetime) -> datetime:
    """Earliest UTC instant strictly after *after* that matches *expression*.

    Naive datetimes are taken to be UTC.  Sub-second precision on *after* is
    dropped; cron fires only on whole minutes so the result is unaffected.
    """
    normalised = validate_schedule(expression)
    base = _as_utc(after).replace(microsecond=0)
    try:
        result = croniter(normalised, base).get_next(datetime)
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidScheduleError(expression, str(exc), cause=exc) from exc
    return _as_utc(result)
