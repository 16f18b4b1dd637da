"""Unit tests for TicketAutoCloseService."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from fuse_jobs.application.engines import (
    SupportTicket,
    TicketAutoCloseService,
    TicketAutoCloseSummary,
    TicketStatus,
)
from fuse_jobs.application.engines.ticket_auto_close import skip_reason
from fuse_jobs.kernel.time import FrozenClock
from fuse_jobs.testing.fakes import InMemoryAuditLog, InMemorySupportTicketStore

NOW = datetime(2026, 3, 5, 2, 0, tzinfo=UTC)


def _ticket(
    ticket_id: str = "t1",
    *,
    resolved_ago: timedelta | None = timedelta(days=4),
    response_ago: timedelta | None = None,
    status: TicketStatus = TicketStatus.RESOLVED,
) -> SupportTicket:
    return SupportTicket(
        ticket_id=ticket_id,
        status=status,
        title=f"Ticket {ticket_id}",
        resolved_at=NOW - resolved_ago if resolved_ago is not None else None,
        last_patient_response_at=NOW - response_ago if response_ago is not None else None,
    )


def _service(*tickets: SupportTicket, **kwargs):
    store = InMemorySupportTicketStore(list(tickets))
    audit = InMemoryAuditLog()
    service = TicketAutoCloseService(store, audit, clock=FrozenClock(NOW), **kwargs)
    return service, store, audit


class TestTicketAutoClose:
    def test_resolved_four_days_ago_is_closed(self):
        async def _run():
            service, store, audit = _service(_ticket())
            summary = await service.check_and_close_resolved_tickets()
            assert summary == TicketAutoCloseSummary(checked=1, closed=1, skipped=0, failed=0)
            closed = store.get("t1")
            assert closed.status is TicketStatus.CLOSED
            assert closed.closed_at == NOW
            entries = audit.all()
            assert len(entries) == 1
            assert entries[0].action == "ticket.auto_closed"
            assert entries[0].resource_id == "t1"
            assert entries[0].occurred_at == NOW
            assert entries[0].metadata["previous_status"] == "resolved"
        asyncio.run(_run())

    def test_exactly_three_days_is_not_closed(self):
        async def _run():
            service, store, audit = _service(_ticket(resolved_ago=timedelta(days=3)))
            summary = await service.check_and_close_resolved_tickets()
            assert summary.closed == 0
            assert summary.skipped == 1
            assert store.get("t1").status is TicketStatus.RESOLVED
            assert audit.all() == []
        asyncio.run(_run())

    def test_three_days_and_a_minute_is_closed(self):
        async def _run():
            service, store, _ = _service(_ticket(resolved_ago=timedelta(days=3, minutes=1)))
            summary = await service.check_and_close_resolved_tickets()
            assert summary.closed == 1
            assert store.get("t1").status is TicketStatus.CLOSED
        asyncio.run(_run())

    def test_patient_response_inside_window_keeps_ticket_open(self):
        async def _run():
            service, store, _ = _service(
                _ticket(resolved_ago=timedelta(days=10), response_ago=timedelta(days=1))
            )
            summary = await service.check_and_close_resolved_tickets()
            assert summary.closed == 0
            assert store.get("t1").status is TicketStatus.RESOLVED
        asyncio.run(_run())

    def test_old_response_before_resolution_does_not_matter(self):
        async def _run():
            service, _, _ = _service(
                _ticket(resolved_ago=timedelta(days=4), response_ago=timedelta(days=6))
            )
            summary = await service.check_and_close_resolved_tickets()
            assert summary.closed == 1
        asyncio.run(_run())

    def test_only_resolved_tickets_are_considered(self):
        async def _run():
            service, store, _ = _service(
                _ticket("open", status=TicketStatus.OPEN),
                _ticket("closed", status=TicketStatus.CLOSED),
                _ticket("resolved"),
            )
            summary = await service.check_and_close_resolved_tickets()
            assert summary.checked == 1
            assert summary.closed == 1
            assert store.get("open").status is TicketStatus.OPEN
        asyncio.run(_run())

    def test_resolved_without_timestamp_is_skipped(self):
        async def _run():
            service, store, _ = _service(_ticket(resolved_ago=None))
            summary = await service.check_and_close_resolved_tickets()
            assert summary.skipped == 1
            assert store.get("t1").status is TicketStatus.RESOLVED
        asyncio.run(_run())

    def test_per_ticket_failure_is_isolated(self):
        async def _run():
            service, store, audit = _service(_ticket("bad"), _ticket("good"))
            store.fail_close_for.add("bad")
            summary = await service.check_and_close_resolved_tickets()
            assert summary == TicketAutoCloseSummary(checked=2, closed=1, skipped=0, failed=1)
            assert store.get("good").status is TicketStatus.CLOSED
            assert [e.resource_id for e in audit.all()] == ["good"]
        asyncio.run(_run())

    def test_custom_inactivity(self):
        async def _run():
            service, _, _ = _service(
                _ticket(resolved_ago=timedelta(days=2)), inactivity=timedelta(days=1)
            )
            summary = await service.check_and_close_resolved_tickets()
            assert summary.closed == 1
        asyncio.run(_run())

    def test_manual_check_runs_the_same_rule(self):
        async def _run():
            service, store, _ = _service(_ticket())
            summary = await service.trigger_manual_check()
            assert summary.closed == 1
            assert store.get("t1").status is TicketStatus.CLOSED
        asyncio.run(_run())

    def test_non_positive_inactivity_rejected(self):
        with pytest.raises(ValueError):
            TicketAutoCloseService(
                InMemorySupportTicketStore(), InMemoryAuditLog(), inactivity=timedelta(0)
            )


class TestSkipReason:
    CUTOFF = NOW - timedelta(days=3)

    def test_resolved_without_timestamp(self):
        assert skip_reason(_ticket(resolved_ago=None), self.CUTOFF) == "missing_resolved_at"

    def test_not_resolved(self):
        assert skip_reason(_ticket(status=TicketStatus.OPEN), self.CUTOFF) == "not_resolved"

    def test_recent_activity(self):
        assert skip_reason(_ticket(resolved_ago=timedelta(days=1)), self.CUTOFF) == "recent_activity"

    def test_due_for_close(self):
        assert skip_reason(_ticket(), self.CUTOFF) is None
